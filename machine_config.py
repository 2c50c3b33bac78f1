# machine_config.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from cipher_path import CipherPath
from debug import Debug
from errors import ConfigurationError
from keyboard_and_plugboard import Plugboard
from rotor_bank import RotorBank
from wheels import (
    ALPHABET,
    REFLECTOR,
    REFLECTORS,
    ROTORS,
    SLOT_NOTCHES,
    SLOT_ROTORS,
    letter_index,
    to_letters,
)

debug = Debug()

DEFAULT_POSITIONS = "AAA"
REQUIRED_KEYS = {"positions", "plugboard"}


def parse_positions(text: str | None) -> Tuple[int, int, int]:
    """Turn Left-Middle-Right letters into (right, middle, left) offsets.

    None gives the AAA home position; anything present must be valid.
    """
    if text is None:
        return (0, 0, 0)
    letters = to_letters(text, "rotor position")
    if len(letters) != 3:
        raise ConfigurationError("Rotor positions must be exactly 3 letters (A-Z)")
    left, middle, right = (letter_index(c) for c in letters)
    return (right, middle, left)


@dataclass(frozen=True)
class MachineConfig:
    """Everything needed to reproduce a run: same config + same text → same output."""

    offsets: Tuple[int, int, int] = (0, 0, 0)          # right, middle, left
    plugboard: Plugboard = field(default_factory=Plugboard)
    rotors: Tuple[str, str, str] = tuple(ROTORS[n] for n in SLOT_ROTORS)
    reflector: str = REFLECTORS[REFLECTOR]
    notches: Tuple[int, int, int] = SLOT_NOTCHES

    # ── construction ------------------------------------------------
    @classmethod
    def from_settings(
        cls,
        positions: str | None = None,
        plugboard: str | None = None,
    ) -> "MachineConfig":
        cfg = cls(
            offsets=parse_positions(positions),
            plugboard=Plugboard.from_string(plugboard),
        )
        debug.log("config", f"positions {cfg.positions} plugboard {str(cfg.plugboard) or '-'}")
        return cfg

    @classmethod
    def from_dict(cls, data: dict) -> "MachineConfig":
        missing = REQUIRED_KEYS - data.keys()
        if missing:
            raise ConfigurationError(f"Missing keys in config: {', '.join(sorted(missing))}")

        plugs = data["plugboard"]
        if isinstance(plugs, list):
            plugs = " ".join(plugs)
        if plugs is not None and not isinstance(plugs, str):
            raise ConfigurationError(f"plugboard must be a string or list of pairs, got {plugs!r}")
        if data["positions"] is not None and not isinstance(data["positions"], str):
            raise ConfigurationError(f"positions must be a string, got {data['positions']!r}")
        return cls.from_settings(data["positions"], plugs)

    def to_dict(self) -> dict:
        return {"positions": self.positions, "plugboard": str(self.plugboard)}

    # ── views -------------------------------------------------------
    @property
    def positions(self) -> str:
        right, middle, left = self.offsets
        return ALPHABET[left] + ALPHABET[middle] + ALPHABET[right]

    def describe(self) -> str:
        left, middle, right = self.positions
        return "\n".join([
            "=== Enigma Configuration ===",
            f"Rotors:     {', '.join(reversed(SLOT_ROTORS))}",
            f"Reflector:  {REFLECTOR}",
            f"Positions:  {self.positions} (Left: {left}, Middle: {middle}, Right: {right})",
            f"Plugboard:  {str(self.plugboard) or '(none)'}",
            "===========================",
        ])

    # ── machine -----------------------------------------------------
    def build(self) -> CipherPath:
        """A fresh machine at the starting position; never shares state."""
        bank = RotorBank(
            self.offsets,
            rotors=self.rotors,
            reflector=self.reflector,
            notches=self.notches,
        )
        return CipherPath(bank, self.plugboard)


# ────────────────────────────────────────────────────────────────────────
#  Key sheet files
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> MachineConfig:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object")
    return MachineConfig.from_dict(data)


def save_config(cfg: MachineConfig, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(cfg.to_dict(), indent=2), encoding="utf-8")
    return path
