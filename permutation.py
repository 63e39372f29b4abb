# permutation.py
from __future__ import annotations

import re
from typing import List, overload

from alphabet import Alphabet
from errors import ConfigurationError

_group_re = re.compile(r"\(([^()]*)\)")


class Permutation:
    """A bijection on the indices of an alphabet, written in cycle notation.

    ``Permutation("(BACD) (EF)", Alphabet("ABCDEFG"))`` sends B→A, A→C,
    C→D, D→B, E→F, F→E and leaves G alone.  Whitespace inside and between
    the parenthesised groups is ignored.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet = alphabet
        n = alphabet.size()

        # integer lookup tables; every index starts as a fixed point
        self._fwd: List[int] = list(range(n))
        self._rev: List[int] = list(range(n))

        leftover = _group_re.sub(" ", cycles)
        if leftover.strip():
            raise ConfigurationError(
                f"Malformed cycle notation {cycles!r}: "
                f"stray text {leftover.split()[0]!r}"
            )

        seen: set[str] = set()
        for group in _group_re.findall(cycles):
            cycle = "".join(group.split())
            for ch in cycle:
                if not alphabet.contains(ch):
                    raise ConfigurationError(f"Symbol {ch!r} not in alphabet")
                if ch in seen:
                    raise ConfigurationError(f"Symbol {ch!r} used in more than one place")
                seen.add(ch)
            self._add_cycle(cycle)

    @classmethod
    def from_wiring(cls, wiring: str, alphabet: Alphabet) -> "Permutation":
        """Build from a wiring string: ``wiring[i]`` is the image of symbol *i*."""
        if sorted(wiring) != sorted(alphabet.symbols):
            raise ConfigurationError("wiring must be a permutation of alphabet")

        perm = cls("", alphabet)
        for i, ch in enumerate(wiring):
            j = alphabet.to_index(ch)
            perm._fwd[i] = j
            perm._rev[j] = i
        return perm

    def _add_cycle(self, cycle: str) -> None:
        idx = [self.alphabet.to_index(ch) for ch in cycle]
        for k, i in enumerate(idx):
            nxt = idx[(k + 1) % len(idx)]
            self._fwd[i] = nxt
            self._rev[nxt] = i

    # ── lookups ---------------------------------------------------
    def size(self) -> int:
        return self.alphabet.size()

    def wrap(self, p: int) -> int:
        """Return *p* modulo the size of this permutation (never negative)."""
        return p % self.size()

    @overload
    def permute(self, p: int) -> int: ...
    @overload
    def permute(self, p: str) -> str: ...

    def permute(self, p):
        if isinstance(p, str):
            return self.alphabet.to_symbol(self._fwd[self.alphabet.to_index(p)])
        return self._fwd[p]

    @overload
    def invert(self, c: int) -> int: ...
    @overload
    def invert(self, c: str) -> str: ...

    def invert(self, c):
        if isinstance(c, str):
            return self.alphabet.to_symbol(self._rev[self.alphabet.to_index(c)])
        return self._rev[c]

    def derangement(self) -> bool:
        """True iff no index maps to itself."""
        return all(j != i for i, j in enumerate(self._fwd))

    def cycles(self) -> str:
        """Cycle notation for this permutation, fixed points omitted."""
        out: list[str] = []
        visited = [False] * self.size()
        for start in range(self.size()):
            if visited[start] or self._fwd[start] == start:
                continue
            group = []
            i = start
            while not visited[i]:
                visited[i] = True
                group.append(self.alphabet.to_symbol(i))
                i = self._fwd[i]
            out.append("(" + "".join(group) + ")")
        return " ".join(out)

    # ── niceties --------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self.alphabet == other.alphabet and self._fwd == other._fwd

    def __hash__(self) -> int:
        return hash((self.alphabet, tuple(self._fwd)))

    def __repr__(self) -> str:
        return f"<Permutation {self.cycles() or '()'}>"
