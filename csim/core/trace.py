"""Trace reader.

Each line of a trace is ``<op> <hexaddress>,<size>``, e.g. ``" L 10,4"`` or
``"S 0x7ff000388,8"``. ``op`` is L (load) or S (store); leading whitespace is
allowed. The size is checked but has no effect on the cache.

The reader is strict: the first malformed line raises MalformedRecord.
"""

import re
import sys
from collections import namedtuple
from typing import Iterable, Iterator

from csim.core.config import ADDRESS_WIDTH
from csim.core.errors import MalformedRecord, SourceUnavailable

TraceRecord = namedtuple('TraceRecord', 'op address size lineno', defaults=(0,))

OPERATIONS = {'L', 'S'}

_RECORD = re.compile(r'^\s*(?P<op>\S+)\s+(?P<addr>[^,\s]*)(?P<comma>,?)\s*(?P<size>\S*)\s*$')
_HEX = re.compile(r'(0[xX])?[0-9a-fA-F]+')
_DEC = re.compile(r'[0-9]+')


def parse_record(text: str, lineno: int = 0) -> TraceRecord:
    m = _RECORD.match(text)
    if m is None:
        raise MalformedRecord("expected '<op> <hexaddress>,<size>'", lineno, text)
    op = m.group('op')
    if op not in OPERATIONS:
        raise MalformedRecord(f"unknown operation {op!r}", lineno, text)
    if not m.group('comma'):
        raise MalformedRecord("missing ',' between address and size", lineno, text)
    if not _HEX.fullmatch(m.group('addr')):
        raise MalformedRecord("address is not hexadecimal", lineno, text)
    address = int(m.group('addr'), 16)
    if address >> ADDRESS_WIDTH:
        raise MalformedRecord(f"address does not fit in {ADDRESS_WIDTH} bits", lineno, text)
    size_field = m.group('size')
    if not _DEC.fullmatch(size_field):
        raise MalformedRecord("size is not a decimal number", lineno, text)
    return TraceRecord(op, address, int(size_field), lineno)


def parse_lines(lines: Iterable[str]) -> Iterator[TraceRecord]:
    """Yield a record per non-blank line, numbering lines from 1."""
    for lineno, text in enumerate(lines, start=1):
        if not text.strip():
            continue
        yield parse_record(text, lineno)


def _read_lines(fh, path: str) -> Iterator[TraceRecord]:
    with fh:
        try:
            yield from parse_lines(fh)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailable(f"cannot read trace file {path!r}: {exc}") from exc


def read_trace(path: str) -> Iterator[TraceRecord]:
    """Open `path` (``-`` is standard input) and return a lazy record iterator.

    The file is opened here rather than on first iteration, so a missing or
    unreadable trace raises SourceUnavailable before any cache is built.
    """
    if path == '-':
        return parse_lines(sys.stdin)
    try:
        fh = open(path, 'r', encoding='utf-8')
    except OSError as exc:
        raise SourceUnavailable(f"cannot open trace file {path!r}: {exc.strerror or exc}") from exc
    return _read_lines(fh, path)


__all__ = ['TraceRecord', 'parse_record', 'parse_lines', 'read_trace']
