# utilities.py
from __future__ import annotations

import string
from typing import Callable, TextIO

from cipher_path import CipherPath
from errors import ConfigurationError
from keyboard_and_plugboard import Plugboard
from machine_config import DEFAULT_POSITIONS, MachineConfig, parse_positions

# ────────────────────────────────────────────────────────────────────────
#  1. Interactive question helpers
# ────────────────────────────────────────────────────────────────────────


def ask(prompt: str, reader: Callable[[str], str] = input) -> str:
    """Read & normalise an operator’s response (uppercase, trimmed)."""
    return reader(prompt).strip().upper()


def get_positions(reader: Callable[[str], str] = input, writer: Callable[[str], None] = print) -> str:
    while True:
        raw = ask("ROTOR POSITIONS (3 LETTERS A-Z, PRESS ENTER FOR AAA): ", reader)
        if not raw:
            writer(f"USING DEFAULT: {DEFAULT_POSITIONS}")
            return DEFAULT_POSITIONS
        try:
            parse_positions(raw)
        except ConfigurationError as exc:
            writer(f"❌  {exc}")
            continue
        writer(f"POSITIONS SET TO: {raw}")
        return raw


def get_plugboard(reader: Callable[[str], str] = input, writer: Callable[[str], None] = print) -> str:
    """Return a *validated* plugboard string (e.g. "AB CD"), "" for none."""
    while True:
        raw = ask("PLUGBOARD PAIRS (E.G. 'AB CD EF', PRESS ENTER FOR NONE): ", reader)
        if not raw:
            writer("NO PLUGBOARD")
            return ""
        try:
            board = Plugboard.from_string(raw)
        except ConfigurationError as exc:
            writer(f"❌  {exc}")
            continue
        writer(f"PLUGBOARD SET TO: {board}")
        return str(board)


def interactive_config(reader: Callable[[str], str] = input, writer: Callable[[str], None] = print) -> MachineConfig:
    writer("UNIGMA: THE LITTLE UNIVAC ENIGMA SIMULATOR")
    writer("ROTORS: I, II, III | REFLECTOR: B\n")
    writer("--- CONFIGURATION ---\n")
    positions = get_positions(reader, writer)
    plugboard = get_plugboard(reader, writer)
    writer("\n--- READY TO ENCRYPT/DECRYPT ---")
    writer("ENTER TEXT (CTRL+Z OR CTRL+D TO END):\n")
    return MachineConfig.from_settings(positions, plugboard)


# ────────────────────────────────────────────────────────────────────────
#  2. Text streams
# ────────────────────────────────────────────────────────────────────────


def _key(path: CipherPath, ch: str) -> str:
    if ch in string.ascii_lowercase:
        ch = ch.upper()
    if ch in string.ascii_uppercase:
        return path.encipher_one(ch)
    return ch                   # not a key: no step, no change


def transform_text(path: CipherPath, text: str) -> str:
    """Encipher the letters of *text*; everything else passes straight through."""
    return "".join(_key(path, ch) for ch in text)


def run_stream(path: CipherPath, infile: TextIO, outfile: TextIO) -> int:
    """Pump *infile* through the machine until EOF; return the key presses used."""
    presses = 0
    while True:
        ch = infile.read(1)
        if not ch:
            break
        if ch in string.ascii_letters:
            presses += 1
        outfile.write(_key(path, ch))
    outfile.flush()
    return presses


def blocks(text: str, size: int = 5) -> str:
    """Split *text* into operator groups, e.g. ``BDZGO QRSTU``."""
    return " ".join(text[i : i + size] for i in range(0, len(text), size))
