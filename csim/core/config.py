"""Cache geometry.

A CacheConfig is built once from the command-line values and never changed.
Validation happens in the constructor so that address decoding and
``Cache.access`` never have to check the geometry again.
"""

from dataclasses import dataclass
from typing import Optional

from csim.core.errors import ConfigurationError

ADDRESS_WIDTH = 64


@dataclass(frozen=True)
class CacheConfig:
    set_index_bits: int
    block_offset_bits: int
    lines_per_set: int
    address_width: int = ADDRESS_WIDTH

    def __post_init__(self):
        self.validate()

    def validate(self):
        for name in ("set_index_bits", "block_offset_bits", "lines_per_set", "address_width"):
            value = getattr(self, name)
            # bool is an int subclass but never a meaningful geometry value
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.set_index_bits < 0:
            raise ConfigurationError("set index bits (-s) must be >= 0")
        if self.block_offset_bits < 0:
            raise ConfigurationError("block offset bits (-b) must be >= 0")
        if self.lines_per_set < 1:
            raise ConfigurationError("lines per set (-E) must be >= 1")
        if self.set_index_bits + self.block_offset_bits >= self.address_width:
            raise ConfigurationError(
                f"s + b must be less than the {self.address_width}-bit address width "
                f"(got {self.set_index_bits} + {self.block_offset_bits})"
            )

    @property
    def set_count(self) -> int:
        return 1 << self.set_index_bits

    @property
    def block_size(self) -> int:
        return 1 << self.block_offset_bits

    @classmethod
    def from_options(cls, s: Optional[int], E: Optional[int], b: Optional[int]) -> "CacheConfig":
        """Build a config from raw option values, naming the first one missing."""
        for flag, value in (("-s", s), ("-E", E), ("-b", b)):
            if value is None:
                raise ConfigurationError(f"missing required option {flag}")
        return cls(set_index_bits=s, block_offset_bits=b, lines_per_set=E)

    def describe(self) -> str:
        return (
            f"Set Index Bits: {self.set_index_bits}, Block bits: {self.block_offset_bits}, "
            f"lines per set: {self.lines_per_set} "
            f"({self.set_count} sets, {self.block_size}-byte blocks)"
        )
