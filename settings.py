# settings.py
from __future__ import annotations

from errors import ConfigurationError, UsageError
from machine import Machine
from permutation import Permutation

MARKER = "*"


def is_setting_line(line: str) -> bool:
    return MARKER in line


def check_slots(machine: Machine) -> None:
    """Raise UsageError unless the inserted rotors form a legal machine."""
    rotors = machine.rotors()
    names = [r.name for r in rotors]

    dup = {n for n in names if names.count(n) > 1}
    if dup:
        raise UsageError(f"Rotor {sorted(dup)[0]!r} selected more than once")

    if not rotors[0].reflecting():
        raise UsageError(f"First rotor must be a reflector, got {names[0]!r}")

    first_moving = machine.num_rotors - machine.pawls
    for k, rotor in enumerate(rotors[1:], start=1):
        if rotor.reflecting():
            raise UsageError(f"Reflector {rotor.name!r} can only sit in slot 0")
        if rotor.rotates() != (k >= first_moving):
            want = "moving" if k >= first_moving else "fixed"
            raise UsageError(f"Slot {k} needs a {want} rotor, got {rotor.name!r}")


def set_up(machine: Machine, line: str) -> None:
    """Apply one setting line such as ``* B Beta III IV I AXLE (YF) (ZH)``."""
    tokens = line.split()
    if not tokens or tokens[0] != MARKER:
        raise ConfigurationError(f"Setting line must start with {MARKER!r}: {line!r}")

    n = machine.num_rotors
    if len(tokens) < n + 2:
        raise ConfigurationError(
            f"Setting line needs {n} rotor names and a setting: {line!r}"
        )

    names = tokens[1 : n + 1]
    setting = tokens[n + 1]
    plugs = " ".join(tokens[n + 2 :])

    # validate names and plugs before touching the machine
    for name in names:
        if not machine.has_rotor(name):
            raise UsageError(f"Unknown rotor {name!r}")
    plugboard = Permutation(plugs, machine.alphabet)

    machine.insert_rotors(names)
    check_slots(machine)
    machine.set_rotors(setting)
    machine.set_plugboard(plugboard)

    machine.debug.log("settings", f"rotors {' '.join(names)} at {setting} plugs {plugs or '-'}")
