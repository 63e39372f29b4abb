# wheels.py
from __future__ import annotations

from typing import Dict, List, Tuple

from alphabet import ALPHA26, Alphabet
from debug import Debug
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor

# ────────────────────────────────────────────────────────────────────────
#  Wheel database (historical wirings, 26-letter alphabet)
# ────────────────────────────────────────────────────────────────────────

# name: (wiring, notches)
LEGACY_ROTORS: Dict[str, Tuple[str, str]] = {
    "I":   ("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":  ("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III": ("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":  ("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":   ("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    "VI":  ("JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
    "VII": ("NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
}

LEGACY_REFLECTORS: Dict[str, str] = {
    "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}

LEGACY_SLOTS = 4    # reflector + three moving rotors
LEGACY_PAWLS = 3


def legacy_catalog(alphabet: Alphabet | None = None) -> List[Rotor]:
    """Fresh Rotor objects for every wheel in the database."""
    alphabet = alphabet if alphabet is not None else Alphabet(ALPHA26)
    catalog = [
        Rotor.reflector(name, Permutation.from_wiring(wiring, alphabet))
        for name, wiring in LEGACY_REFLECTORS.items()
    ]
    catalog += [
        Rotor.moving(name, Permutation.from_wiring(wiring, alphabet), notches)
        for name, (wiring, notches) in LEGACY_ROTORS.items()
    ]
    return catalog


def legacy_machine(debug: Debug | None = None) -> Machine:
    alphabet = Alphabet(ALPHA26)
    return Machine(alphabet, LEGACY_SLOTS, LEGACY_PAWLS, legacy_catalog(alphabet), debug=debug)
