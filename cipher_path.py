# cipher_path.py  ─────────────────────────────────────────────────
from __future__ import annotations

from debug import Debug
from keyboard_and_plugboard import Keyboard, Plugboard
from rotor_bank import Direction, RotorBank, Wheel

debug = Debug()

_INBOUND = (Wheel.RIGHT, Wheel.MIDDLE, Wheel.LEFT)
_OUTBOUND = (Wheel.LEFT, Wheel.MIDDLE, Wheel.RIGHT)


class CipherPath:
    def __init__(
        self,
        bank: RotorBank,
        pb: Plugboard | None = None,
        kb: Keyboard | None = None,
    ) -> None:
        self.bank = bank
        self.pb   = pb if pb is not None else Plugboard()
        self.kb   = kb if kb is not None else Keyboard()

    # ── encipher one symbol  ────────────────────────────────────

    def encipher_one(self, letter: str) -> str:
        """Step the bank, then run *letter* (uppercase A-Z) through the circuit."""
        self.bank.step()
        offsets = self.bank.offsets

        signal = self.kb.forward(self.pb.apply(letter))

        for wheel in _INBOUND:
            signal = self.bank.substitute(signal, wheel, offsets[wheel], Direction.FORWARD)

        signal = self.bank.reflect(signal)

        for wheel in _OUTBOUND:
            signal = self.bank.substitute(signal, wheel, offsets[wheel], Direction.REVERSE)

        out_ch = self.pb.apply(self.kb.backward(signal))
        debug.log("encipher", f"{letter}->{out_ch} window {self.bank.window}")
        return out_ch

    def __repr__(self) -> str:
        return f"<CipherPath {self.bank!r} {self.pb!r}>"
