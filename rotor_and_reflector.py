# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple

from alphabet import Alphabet
from errors import ConfigurationError
from permutation import Permutation


class Kind(Enum):
    """Rotor variants, keyed by their configuration-file tag."""

    MOVING = "M"
    FIXED = "N"
    REFLECTOR = "R"


class _Behaviour(NamedTuple):
    rotates: bool
    reflects: bool
    at_notch: Callable[["Rotor"], bool]
    advance: Callable[["Rotor"], None]


def _notch_hit(rotor: "Rotor") -> bool:
    return rotor.alphabet.to_symbol(rotor.setting) in rotor.notches


def _never(rotor: "Rotor") -> bool:
    return False


def _step(rotor: "Rotor") -> None:
    rotor.setting = rotor.permutation.wrap(rotor.setting + 1)


def _stay(rotor: "Rotor") -> None:
    pass


_BEHAVIOUR: dict[Kind, _Behaviour] = {
    Kind.MOVING:    _Behaviour(rotates=True,  reflects=False, at_notch=_notch_hit, advance=_step),
    Kind.FIXED:     _Behaviour(rotates=False, reflects=False, at_notch=_never,     advance=_stay),
    Kind.REFLECTOR: _Behaviour(rotates=False, reflects=True,  at_notch=_never,     advance=_stay),
}


class Rotor:
    """One wheel of the machine: a fixed wiring plus a rotational offset.

    Build through :meth:`moving`, :meth:`fixed` or :meth:`reflector`; the
    variant decides whether the wheel turns, whether it has notches and
    whether it may sit in the reflector slot.
    """

    def __init__(
        self,
        name: str,
        permutation: Permutation,
        kind: Kind,
        notches: str = "",
    ) -> None:
        if kind is not Kind.MOVING and notches:
            raise ConfigurationError(f"Rotor {name!r}: only moving rotors have notches")
        for ch in notches:
            if not permutation.alphabet.contains(ch):
                raise ConfigurationError(
                    f"Rotor {name!r}: notch {ch!r} not in alphabet"
                )
        if kind is Kind.REFLECTOR and not permutation.derangement():
            raise ConfigurationError(
                f"Reflector {name!r} wiring must have no fixed points"
            )

        self.name = name
        self.permutation = permutation
        self.kind = kind
        self.notches = frozenset(notches)
        self.setting = 0
        self._behaviour = _BEHAVIOUR[kind]

    # ── constructors ---------------------------------------------
    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str) -> "Rotor":
        return cls(name, permutation, Kind.MOVING, notches)

    @classmethod
    def fixed(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, Kind.FIXED)

    @classmethod
    def reflector(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, Kind.REFLECTOR)

    # ── capabilities ---------------------------------------------
    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    def size(self) -> int:
        return self.permutation.size()

    def rotates(self) -> bool:
        return self._behaviour.rotates

    def reflecting(self) -> bool:
        return self._behaviour.reflects

    def at_notch(self) -> bool:
        return self._behaviour.at_notch(self)

    def advance(self) -> None:
        self._behaviour.advance(self)

    # ── setting ---------------------------------------------------
    def rotate_to(self, posn: int | str) -> None:
        """Set the offset, either as an index or as the visible window symbol."""
        if isinstance(posn, str):
            posn = self.alphabet.to_index(posn)
        self.setting = posn

    def window(self) -> str:
        return self.alphabet.to_symbol(self.setting)

    # ── signal paths ---------------------------------------------
    def convert_forward(self, sig: int) -> int:
        wrap = self.permutation.wrap
        mapped = self.permutation.permute(wrap(sig + self.setting))
        return wrap(mapped - self.setting)

    def convert_backward(self, sig: int) -> int:
        wrap = self.permutation.wrap
        mapped = self.permutation.invert(wrap(sig + self.setting))
        return wrap(mapped - self.setting)

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<Rotor {self.name} {self.kind.name} pos={self.window()}>"
