"""Error kinds raised by the cache simulator.

Every error carries a non-zero ``exit_code`` so the command line can turn it
into a process status without a lookup table.
"""


class CacheSimError(Exception):
    exit_code = 1


class ConfigurationError(CacheSimError):
    """Bad or missing s/b/E/trace option, or s + b too wide for an address."""


class SourceUnavailable(CacheSimError):
    """The trace could not be opened or read."""


class MalformedRecord(CacheSimError):
    """A trace line that is not of the form ``<op> <hexaddr>,<size>``."""

    def __init__(self, message: str, lineno: int = 0, text: str = ""):
        super().__init__(message)
        self.lineno = lineno
        self.text = text

    def __str__(self):
        base = super().__str__()
        if self.lineno:
            return f"line {self.lineno}: {base}: {self.text.rstrip()!r}"
        return base


class ResourceExhausted(CacheSimError):
    """Allocation of cache sets or lines failed."""


__all__ = [
    "CacheSimError",
    "ConfigurationError",
    "SourceUnavailable",
    "MalformedRecord",
    "ResourceExhausted",
]
