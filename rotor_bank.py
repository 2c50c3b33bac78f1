# rotor_bank.py
from __future__ import annotations

from enum import Enum, IntEnum
from typing import Sequence, Tuple

from debug import Debug
from errors import ConfigurationError
from wheels import (
    ALPHABET,
    REFLECTOR,
    REFLECTORS,
    ROTORS,
    SIZE,
    SLOT_NOTCHES,
    SLOT_ROTORS,
    check_permutation,
)

debug = Debug()


class Direction(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


class Wheel(IntEnum):
    """Slot selector.  Offsets and notches are indexed the same way."""

    RIGHT = 0
    MIDDLE = 1
    LEFT = 2
    REFLECTOR = 3


class RotorWiring:
    def __init__(self, wiring: str, label: str = "wiring") -> None:
        check_permutation(wiring, label)
        self.label = label
        self.wiring = wiring

        # integer lookup tables
        self._fwd = tuple(ALPHABET.index(c) for c in wiring)
        self._rev = tuple(wiring.index(c) for c in ALPHABET)

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int, offset: int = 0) -> int:
        shift = (sig + offset) % SIZE
        return (self._fwd[shift] - offset) % SIZE

    def backward(self, sig: int, offset: int = 0) -> int:
        shift = (sig + offset) % SIZE
        return (self._rev[shift] - offset) % SIZE

    def __repr__(self) -> str:
        return f"<RotorWiring {self.label} {self.wiring}>"


class RotorBank:
    """Three rotors plus the fixed reflector.

    Only ``offsets`` changes at runtime; it is ordered right, middle, left
    like the wheel slots.  A bank belongs to one cipher stream: build
    another one for a second stream instead of sharing.
    """

    def __init__(
        self,
        offsets: Sequence[int] = (0, 0, 0),
        *,
        rotors: Sequence[str] = tuple(ROTORS[name] for name in SLOT_ROTORS),
        reflector: str = REFLECTORS[REFLECTOR],
        notches: Sequence[int] = SLOT_NOTCHES,
    ) -> None:
        if len(rotors) != 3 or len(notches) != 3:
            raise ConfigurationError("RotorBank needs exactly 3 rotors and 3 notches")
        if any(not 0 <= n < SIZE for n in notches):
            raise ConfigurationError(f"Notch positions must be 0-{SIZE - 1}: {list(notches)}")

        self._wheels: Tuple[RotorWiring, ...] = (
            RotorWiring(rotors[Wheel.RIGHT], "right rotor"),
            RotorWiring(rotors[Wheel.MIDDLE], "middle rotor"),
            RotorWiring(rotors[Wheel.LEFT], "left rotor"),
            RotorWiring(reflector, "reflector"),
        )
        self.notches: Tuple[int, int, int] = tuple(notches)
        self.offsets: list[int] = [0, 0, 0]
        self.set_offsets(offsets)

    # ── positions ------------------------------------------------
    def set_offsets(self, offsets: Sequence[int]) -> None:
        if len(offsets) != 3 or any(not 0 <= o < SIZE for o in offsets):
            raise ConfigurationError(f"Offsets must be three values 0-{SIZE - 1}: {list(offsets)}")
        self.offsets = list(offsets)

    @property
    def window(self) -> str:
        right, middle, left = self.offsets
        return ALPHABET[left] + ALPHABET[middle] + ALPHABET[right]

    # ── substitution ---------------------------------------------
    def substitute(self, sig: int, wheel: Wheel, offset: int, direction: Direction) -> int:
        wiring = self._wheels[wheel]
        if direction is Direction.FORWARD:
            out = wiring.forward(sig, offset)
        else:
            out = wiring.backward(sig, offset)
        debug.log("rotor", f"{Wheel(wheel).name} {direction.value} @{offset}: {sig}->{out}")
        return out

    def reflect(self, sig: int) -> int:
        out = self.substitute(sig, Wheel.REFLECTOR, 0, Direction.FORWARD)
        debug.log("reflector", f"{sig}->{out}")
        return out

    # ── stepping --------------------------------------------------
    def step(self) -> None:
        """Advance one key press, double-stepping the middle rotor at its notch."""
        right, middle, left = self.offsets

        if middle == self.notches[Wheel.MIDDLE]:
            middle = (middle + 1) % SIZE
            left = (left + 1) % SIZE
        elif right == self.notches[Wheel.RIGHT]:
            middle = (middle + 1) % SIZE
        right = (right + 1) % SIZE

        self.offsets = [right, middle, left]
        debug.log("stepping", f"window {self.window} offsets {self.offsets}")

    def __repr__(self) -> str:
        return f"<RotorBank window={self.window}>"
