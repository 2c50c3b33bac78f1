# wheels.py
from __future__ import annotations

import string
from typing import Dict, Tuple

from errors import ConfigurationError

# ───── alphabet ────────────────────────────────────────────────────
ALPHABET = string.ascii_uppercase
SIZE = len(ALPHABET)
assert SIZE == 26

# ───── wheel database ──────────────────────────────────────────────
ROTORS: Dict[str, str] = {
    "I":   "EKMFLGDQVZNTOWYHXUSPAIBRCJ",
    "II":  "AJDKSIRUXBLHWTMCQGZNPYFVOE",
    "III": "BDFHJLCPRTXVZNYEIWGAKMUSQO",
}
REFLECTORS: Dict[str, str] = {
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
}

NOTCHES: Dict[str, str] = {"I": "Q", "II": "E", "III": "V"}

# Slot order is right, middle, left.  The notch table is read by slot
# index, so the right slot checks Q and the middle slot checks E.
SLOT_ROTORS: Tuple[str, str, str] = ("III", "II", "I")
SLOT_NOTCHES: Tuple[int, int, int] = tuple(
    ALPHABET.index(NOTCHES[name]) for name in ("I", "II", "III")
)
REFLECTOR = "B"


def check_permutation(wiring: str, label: str = "wiring") -> str:
    """Return *wiring* if it is a bijection over ALPHABET, else raise."""
    if len(wiring) != SIZE:
        raise ConfigurationError(
            f"{label} must have {SIZE} letters, got {len(wiring)}"
        )
    if sorted(wiring) != sorted(ALPHABET):
        missing = "".join(sorted(set(ALPHABET) - set(wiring)))
        raise ConfigurationError(f"{label} is not a permutation (missing {missing!r})")
    return wiring


def letter_index(letter: str) -> int:
    """A..Z → 0..25, rejecting anything else with ConfigurationError."""
    if len(letter) != 1 or letter not in ALPHABET:
        raise ConfigurationError(f"Invalid letter {letter!r}. Must be A-Z.")
    return ALPHABET.index(letter)


def to_letters(text: str, label: str = "letter") -> str:
    """Uppercase ASCII letters only; any other character is an error.

    ``str.upper`` alone is not enough: "ı" becomes "I" and "ß" becomes "SS".
    """
    out = []
    for c in text:
        if c in string.ascii_lowercase:
            c = c.upper()
        if c not in ALPHABET:
            raise ConfigurationError(f"Invalid {label} {c!r}. Must be A-Z.")
        out.append(c)
    return "".join(out)
