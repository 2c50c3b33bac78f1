# unigma.py
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Sequence

from debug import COMPONENTS, Debug
from errors import ConfigurationError, UsageError
from keyboard_and_plugboard import Plugboard
from machine_config import MachineConfig, load_config, parse_positions, save_config
from utilities import blocks, interactive_config, run_stream, transform_text
from wheels import ALPHABET

# ────────────────────────────────────────────────────────────────────────
#  0. Logging
# ────────────────────────────────────────────────────────────────────────

debug = Debug()

EPILOG = """\
examples:
  unigma -p AAA                    # start at position AAA
  unigma -p XYZ -b "AB CD"         # custom position and plugboard
  echo "HELLO" | unigma -p QWE     # encrypt with position QWE

Rotors: I, II, III | Reflector: B
"""


# ────────────────────────────────────────────────────────────────────────
#  1. CLI helpers
# ────────────────────────────────────────────────────────────────────────


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:   # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="unigma",
        description="Unigma: the little UNIVAC Enigma simulator",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-p", "--positions", metavar="POSITIONS", help="Rotor positions, 3 letters A-Z read left to right (default: AAA)")
    p.add_argument("-b", "--plugboard", metavar="PLUGBOARD", help='Plugboard pairs, space separated, e.g. "AB CD EF"')
    p.add_argument("-s", "--show", action="store_true", help="Show the configuration and exit")
    p.add_argument("-m", "--message", metavar="TEXT", help="Encipher TEXT instead of reading standard input")
    p.add_argument("-g", "--groups", action="store_true", help="With -m, print only the letters, in groups of five")
    p.add_argument("--config", metavar="FILE", help="Load the key sheet (positions + plugboard) from JSON")
    p.add_argument("--save-config", metavar="FILE", help="Write the resulting key sheet to JSON")
    p.add_argument("--interactive", action="store_true", help="Ask for positions and plugboard on the terminal")
    p.add_argument("--debug", metavar="COMPONENT", action="append", default=[], choices=COMPONENTS, help=f"Log one engine component ({', '.join(COMPONENTS)}); repeatable")
    return p


def _prompt(text: str) -> str:
    """Prompt on stderr so stdout carries nothing but the ciphertext."""
    sys.stderr.write(text)
    sys.stderr.flush()
    return sys.stdin.readline()


def resolve_config(args: argparse.Namespace, interactive: bool) -> MachineConfig:
    """Where do we get the machine settings?"""
    if args.config:
        cfg = load_config(args.config)
        if args.positions is not None:
            cfg = replace(cfg, offsets=parse_positions(args.positions))
        if args.plugboard is not None:
            cfg = replace(cfg, plugboard=Plugboard.from_string(args.plugboard))
        return cfg
    if interactive:
        return interactive_config(reader=_prompt, writer=lambda s: print(s, file=sys.stderr))
    return MachineConfig.from_settings(args.positions, args.plugboard)


# ────────────────────────────────────────────────────────────────────────
#  2. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        print(f"Error: {exc}\n", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    if args.debug:
        debug.enable(*args.debug)

    try:
        cfg = resolve_config(args, interactive=args.interactive or not argv)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: cannot read key sheet: {exc}", file=sys.stderr)
        return 1

    if args.save_config:
        try:
            path = save_config(cfg, args.save_config)
        except OSError as exc:
            print(f"Error: cannot write key sheet: {exc}", file=sys.stderr)
            return 1
        print(f"✅  Wrote {path}", file=sys.stderr)

    if args.show:
        print(cfg.describe(), file=sys.stderr)
        return 0

    machine = cfg.build()

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        out = transform_text(machine, args.message)
        if args.groups:
            out = blocks("".join(c for c in out if c in ALPHABET))
        print(out)
        return 0

    # stream mode --------------------------------------------------------
    presses = run_stream(machine, sys.stdin, sys.stdout)
    debug.log("encipher", f"{presses} key presses, final window {machine.bank.window}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
