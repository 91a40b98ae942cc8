"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `csim`
package without installing it, and provide small helpers for building
caches and trace files.
"""
import os
import sys

import pytest

# Compute project root: two directories above this file (csim/tests -> csim -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from csim.core.cache import Cache  # noqa: E402
from csim.core.config import CacheConfig  # noqa: E402


@pytest.fixture
def make_cache():
    def _make(s=0, E=1, b=0):
        return Cache(CacheConfig(set_index_bits=s, block_offset_bits=b, lines_per_set=E))
    return _make


@pytest.fixture
def trace_file(tmp_path):
    """Write the given lines to a trace file and return its path as str."""
    def _write(*lines, name='test.trace'):
        path = tmp_path / name
        path.write_text(''.join(line + '\n' for line in lines))
        return str(path)
    return _write
