# config.py
from __future__ import annotations

from pathlib import Path
from typing import Iterator, List

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError, EnigmaError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Kind, Rotor

# ────────────────────────────────────────────────────────────────────────
#  Configuration text format
#
#      ABCDEFGHIJKLMNOPQRSTUVWXYZ
#      5 3
#      I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
#      B R       (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN)
#                (MO) (TZ) (VW)
#
#  alphabet, slot count, pawl count, then one descriptor per rotor:
#  NAME, TYPE+NOTCHES, and every following token that holds a parenthesis.
# ────────────────────────────────────────────────────────────────────────


class _Tokens:
    """Whitespace tokens with one-token lookahead."""

    def __init__(self, text: str) -> None:
        self._items: List[str] = text.split()
        self._pos = 0

    def has_next(self) -> bool:
        return self._pos < len(self._items)

    def peek(self) -> str:
        return self._items[self._pos]

    def next(self, what: str) -> str:
        if not self.has_next():
            raise ConfigurationError(f"configuration file truncated: expected {what}")
        tok = self._items[self._pos]
        self._pos += 1
        return tok

    def next_int(self, what: str) -> int:
        tok = self.next(what)
        try:
            return int(tok)
        except ValueError:
            raise ConfigurationError(f"{what} must be an integer, got {tok!r}") from None

    def cycle_tokens(self) -> Iterator[str]:
        while self.has_next() and ("(" in self.peek() or ")" in self.peek()):
            yield self.next("cycle")


def _read_rotor(tokens: _Tokens, alphabet: Alphabet) -> Rotor:
    name = tokens.next("rotor name")
    type_notch = tokens.next(f"type of rotor {name}")
    tag, notches = type_notch[0], type_notch[1:]

    try:
        kind = Kind(tag)
    except ValueError:
        raise ConfigurationError(
            f"Rotor {name!r}: unknown type {tag!r} (expected M, N or R)"
        ) from None

    cycles = " ".join(tokens.cycle_tokens())
    return Rotor(name, Permutation(cycles, alphabet), kind, notches)


def parse_config(text: str, debug: Debug | None = None) -> Machine:
    """Return a machine configured from configuration *text*."""
    debug = debug if debug is not None else Debug()
    tokens = _Tokens(text)

    alphabet = Alphabet(tokens.next("alphabet"))
    num_rotors = tokens.next_int("number of rotor slots")
    pawls = tokens.next_int("number of pawls")
    debug.log("config", f"alphabet {alphabet.symbols!r}, {num_rotors} slots, {pawls} pawls")

    rotors: List[Rotor] = []
    while tokens.has_next():
        rotor = _read_rotor(tokens, alphabet)
        debug.log(
            "config",
            f"rotor {rotor.name} {rotor.kind.name} "
            f"notches={''.join(sorted(rotor.notches))!r} {rotor.permutation.cycles()}",
        )
        rotors.append(rotor)

    return Machine(alphabet, num_rotors, pawls, rotors, debug=debug)


def load_config(path: str | Path, debug: Debug | None = None) -> Machine:
    text = Path(path).read_text(encoding="utf-8")
    try:
        return parse_config(text, debug)
    except EnigmaError as e:
        raise ConfigurationError(f"{path}: {e}") from e
