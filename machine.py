# machine.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from copy import deepcopy
from typing import Iterable, List, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError, UsageError
from permutation import Permutation
from rotor_and_reflector import Rotor


class Machine:
    """A complete rotor machine.

    Slot 0 holds the reflector and slot ``num_rotors - 1`` the fast rotor.
    The catalog passed in is copied, so stepping never touches the
    caller's rotor objects.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
        debug: Debug | None = None,
    ) -> None:
        if not 1 < num_rotors:
            raise ConfigurationError(f"need at least 2 rotor slots, got {num_rotors}")
        if not 0 <= pawls < num_rotors:
            raise ConfigurationError(
                f"pawls must be in 0–{num_rotors - 1}, got {pawls}"
            )

        self.alphabet = alphabet
        self.num_rotors = num_rotors
        self.pawls = pawls
        self.debug = debug if debug is not None else Debug()

        # every rotor lives once in the catalog; slots index into it
        self._catalog: List[Rotor] = []
        self._by_name: dict[str, int] = {}
        for rotor in all_rotors:
            if rotor.name in self._by_name:
                raise ConfigurationError(f"Rotor {rotor.name!r} defined twice")
            if rotor.alphabet != alphabet:
                raise ConfigurationError(
                    f"Rotor {rotor.name!r} uses a different alphabet"
                )
            self._by_name[rotor.name] = len(self._catalog)
            self._catalog.append(deepcopy(rotor))

        self._slots: List[int] = []
        self._plugboard = Permutation("", alphabet)

    # ── catalog & slots ─────────────────────────────────────────

    def available(self) -> List[str]:
        """Names of every rotor in the catalog, in definition order."""
        return [r.name for r in self._catalog]

    def has_rotor(self, name: str) -> bool:
        return name in self._by_name

    def catalog_rotor(self, name: str) -> Rotor:
        try:
            return self._catalog[self._by_name[name]]
        except KeyError:
            raise UsageError(f"Unknown rotor {name!r}") from None

    def get_rotor(self, k: int) -> Rotor:
        """Rotor in slot *k* (0 is the reflector)."""
        if not self._slots:
            raise UsageError("No rotors inserted")
        return self._catalog[self._slots[k]]

    def rotors(self) -> List[Rotor]:
        return [self._catalog[i] for i in self._slots]

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill slots 0..num_rotors-1 with the named catalog rotors.

        Placement rules (reflector first, moving rotors rightmost) are
        checked by the setup routine, not here.
        """
        if len(names) != self.num_rotors:
            raise UsageError(
                f"need {self.num_rotors} rotor names, got {len(names)}"
            )
        slots = []
        for name in names:
            if name not in self._by_name:
                raise UsageError(f"Unknown rotor {name!r}")
            slots.append(self._by_name[name])
        self._slots = slots

    # ── key & plugboard helpers ─────────────────────────────────

    def set_rotors(self, setting: str) -> None:
        """Rotate slots 1..num_rotors-1 to the window letters in *setting*."""
        if len(setting) != self.num_rotors - 1:
            raise UsageError(
                f"setting {setting!r} must have {self.num_rotors - 1} symbols"
            )
        indices = [self.alphabet.to_index(ch) for ch in setting]
        for k, posn in enumerate(indices, start=1):
            self.get_rotor(k).rotate_to(posn)

    def plugboard(self) -> Permutation:
        return self._plugboard

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet != self.alphabet:
            raise UsageError("plugboard alphabet differs from machine alphabet")
        self._plugboard = plugboard
        self.debug.log("plugboard", f"plugboard {plugboard.cycles() or '(identity)'}")

    def windows(self) -> str:
        """Visible letters of slots 1..num_rotors-1."""
        return "".join(r.window() for r in self.rotors()[1:])

    # ── stepping logic  ─────────────────────────────────────────

    def _advance_rotors(self) -> None:
        """Advance rotors one key-press.

        Slots are visited left to right, once each; the fast rotor always
        steps.  A middle rotor sitting on its notch steps together with its
        left neighbour, which gives the double step.
        """
        rotors = self.rotors()
        for i in range(1, len(rotors) - 1):
            if rotors[i].rotates() and rotors[i + 1].at_notch():
                rotors[i].advance()
            elif rotors[i - 1].rotates() and rotors[i].at_notch():
                rotors[i].advance()
        rotors[-1].advance()

        if self.debug.active("stepping"):
            self.debug.log("stepping", f"windows {self.windows()}")

    # ── encipher one symbol  ────────────────────────────────────

    def convert(self, c: int) -> int:
        """Convert index *c*, after first advancing the machine."""
        if not 0 <= c < self.alphabet.size():
            raise UsageError(f"Signal {c} out of range 0–{self.alphabet.size() - 1}")
        if not self._slots:
            raise UsageError("No rotors inserted")
        self._advance_rotors()
        rotors = self.rotors()

        signal = self._plugboard.permute(c)
        plugged = signal

        for rotor in reversed(rotors):
            signal = rotor.convert_forward(signal)

        for rotor in rotors[1:]:
            signal = rotor.convert_backward(signal)

        signal = self._plugboard.permute(signal)

        if self.debug.active("machine"):
            to_sym = self.alphabet.to_symbol
            self.debug.log(
                "machine",
                f"[{self.windows()}] {to_sym(c)} -> {to_sym(plugged)} -> {to_sym(signal)}",
            )
        return signal

    def convert_message(self, msg: str) -> str:
        """Convert every symbol of *msg* in order, stepping as we go."""
        if not self._slots:
            raise UsageError("No rotors inserted")
        indices = [self.alphabet.to_index(ch) for ch in msg]
        return "".join(self.alphabet.to_symbol(self.convert(i)) for i in indices)

    def __repr__(self) -> str:
        names = [r.name for r in self.rotors()]
        return f"<Machine slots={names} pawls={self.pawls}>"
