# alphabet.py
from __future__ import annotations

import string

from errors import ConfigurationError, UsageError

ALPHA26 = string.ascii_uppercase

# symbols that would collide with cycle notation or the setting-line marker
_RESERVED = set("()*")


class Alphabet:
    """An ordered set of symbols, each identified by its position."""

    def __init__(self, symbols: str = ALPHA26) -> None:
        if not symbols:
            raise ConfigurationError("Alphabet must not be empty")

        self.symbols: str = symbols
        self.symbol_to_index: dict[str, int] = {}

        for i, ch in enumerate(symbols):
            if ch.isspace() or ch in _RESERVED:
                raise ConfigurationError(f"Symbol {ch!r} cannot be used in an alphabet")
            if ch in self.symbol_to_index:
                raise ConfigurationError(f"Symbol {ch!r} appears twice in alphabet")
            self.symbol_to_index[ch] = i

    def size(self) -> int:
        return len(self.symbols)

    def contains(self, symbol: str) -> bool:
        return symbol in self.symbol_to_index

    # symbol → integer signal
    def to_index(self, symbol: str) -> int:
        try:
            return self.symbol_to_index[symbol]
        except KeyError:
            raise UsageError(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None

    # integer signal → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self.symbols)):
            hi = len(self.symbols) - 1
            raise UsageError(f"Signal {index} out of range 0–{hi}")
        return self.symbols[index]

    # ── niceties --------------------------------------------------
    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.symbol_to_index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self.symbols == other.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        return f"<Alphabet {self.symbols!r}>"
