# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Sequence
from debug import Debug
from errors import ConfigurationError
from wheels import ALPHABET, to_letters

debug = Debug()

MAX_PLUGBOARD_LEN = 256


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    def __init__(self, alphabet: str = ALPHABET) -> None:
        self.alphabet: str = alphabet
        self.alpha_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(alphabet)
        }

    # letter → integer signal
    def forward(self, letter: str) -> int:
        try:
            return self.alpha_to_index[letter]
        except KeyError:
            raise ValueError(
                f"Invalid character {letter!r}; only A-Z reach the rotors."
            ) from None

    # integer signal → letter
    def backward(self, signal: int) -> str:
        if not (0 <= signal < len(self.alphabet)):
            hi = len(self.alphabet) - 1
            raise ValueError(f"Signal {signal} out of range 0–{hi}")
        return self.alphabet[signal]


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    def __init__(self, pairs: Sequence[str | tuple[str, str]] = ()) -> None:
        self.pairs: tuple[tuple[str, str], ...] = ()
        self.mapping: dict[str, str] = {}
        used: set[str] = set()
        committed: list[tuple[str, str]] = []

        for raw in pairs:
            # normalise to (a, b)
            token = raw if isinstance(raw, str) else "".join(raw)
            if len(token) != 2:
                raise ConfigurationError(f"Plugboard pair {raw!r} must be exactly 2 letters")
            a, b = to_letters(token, "plugboard symbol")
            if a == b:
                raise ConfigurationError(f"Plugboard cannot map a letter to itself: {a}")
            if a in used or b in used:
                dup = a if a in used else b
                raise ConfigurationError(f"Letter {dup!r} already used in plugboard")

            # passed validation → commit swap
            self.mapping[a], self.mapping[b] = b, a
            used.update((a, b))
            committed.append((a, b))

        self.pairs = tuple(committed)

    @classmethod
    def from_string(cls, text: str | None) -> "Plugboard":
        """Parse ``"AB CD EF"``; None or blank means an empty plugboard."""
        if not text:
            return cls()
        if len(text) >= MAX_PLUGBOARD_LEN:
            raise ConfigurationError(
                f"Plugboard configuration too long (max {MAX_PLUGBOARD_LEN - 1} characters)"
            )
        return cls(text.split())

    def apply(self, letter: str) -> str:
        mapped = self.mapping.get(letter, letter)
        if mapped != letter:
            debug.log("plugboard", f"{letter}->{mapped}")
        return mapped

    def __str__(self) -> str:
        return " ".join(a + b for a, b in self.pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plugboard):
            return NotImplemented
        return self.mapping == other.mapping

    def __hash__(self) -> int:
        return hash(frozenset(self.mapping.items()))

    def __bool__(self) -> bool:
        return bool(self.pairs)

    # nicety for debugging
    def __repr__(self) -> str:
        return f"<Plugboard {self}>"
