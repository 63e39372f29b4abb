# main.py
from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Iterable, List, TextIO

from config import load_config
from debug import COMPONENTS, Debug
from errors import ConfigurationError, EnigmaError
from machine import Machine
from settings import is_setting_line, set_up
from utilities import group_blocks, preprocess_message
from wheels import legacy_machine

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Config:
    """Runtime switches for a command-line run."""

    block: int = 5                  # output group width
    verbose: bool = False           # per-character trace on stderr


# ────────────────────────────────────────────────────────────────────────
#  1. Message processing
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, lines: Iterable[str], out: TextIO, cfg: Config | None = None) -> None:
    """Run every line of *lines* through *machine*, writing results to *out*.

    The first line must be a setting line; later setting lines re-key the
    machine between messages.
    """
    cfg = cfg if cfg is not None else Config()
    first = True

    for raw in lines:
        line = raw.rstrip("\r\n")
        if first:
            if not is_setting_line(line):
                raise ConfigurationError("input must begin with a setting line")
            first = False

        if is_setting_line(line):
            set_up(machine, line)
            continue

        converted = machine.convert_message(preprocess_message(line))
        out.write(group_blocks(converted, cfg.block) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Encrypt or decrypt messages with a configurable rotor machine"
    )
    p.add_argument("files", nargs="*", metavar="FILE", help="CONFIG [INPUT [OUTPUT]]; with --legacy, just [INPUT [OUTPUT]].")
    p.add_argument("-v", "--verbose", action="store_true", help="Trace every converted character on stderr.")
    p.add_argument("--debug", action="append", default=[], choices=COMPONENTS, metavar="COMPONENT", help=f"Enable tracing for a component ({', '.join(COMPONENTS)}). Repeatable.")
    p.add_argument("--block", type=int, default=5, help="Output group width. Default: 5")
    p.add_argument("--legacy", action="store_true", help="Use the built-in historical wheels instead of a configuration file.")

    args = p.parse_args(argv)
    need = 0 if args.legacy else 1
    if not need <= len(args.files) <= need + 2:
        p.error("expected " + ("[INPUT [OUTPUT]]" if args.legacy else "CONFIG [INPUT [OUTPUT]]"))
    if args.block < 1:
        p.error("--block must be positive")
    return args


def build_debug(cfg: Config, components: List[str]) -> Debug:
    debug = Debug()
    if cfg.verbose:
        debug.enable("machine")
    if components:
        debug.enable(*components)
    if debug.any_active():
        Debug.configure_root()
    return debug


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(block=args.block, verbose=args.verbose)
    debug = build_debug(cfg, args.debug)

    files = list(args.files)
    try:
        if args.legacy:
            machine = legacy_machine(debug)
        else:
            machine = load_config(files.pop(0), debug)

        with ExitStack() as stack:
            src = stack.enter_context(open(files[0], encoding="utf-8")) if files else sys.stdin
            dst = (
                stack.enter_context(open(files[1], "w", encoding="utf-8"))
                if len(files) > 1
                else sys.stdout
            )
            process(machine, src, dst, cfg)
    except (EnigmaError, OSError, UnicodeError) as e:
        sys.exit(f"Error: {e}")


if __name__ == "__main__":
    main()
