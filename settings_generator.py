# settings_generator.py
from __future__ import annotations

import argparse
from pathlib import Path
from random import Random, SystemRandom
from typing import List, Sequence

from keyboard_and_plugboard import Plugboard
from machine_config import MachineConfig, save_config
from wheels import ALPHABET

MAX_PAIRS = len(ALPHABET) // 2
DEFAULT_PAIRS = 10

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = min(k, MAX_PAIRS)
    pool = list(ALPHABET)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def generate(pairs: int = DEFAULT_PAIRS, seed: int | None = None) -> MachineConfig:
    rng = build_rng(seed)
    positions = "".join(rng.choice(ALPHABET) for _ in range(3))
    plugboard = Plugboard(choose_pairs(pairs, rng))
    return MachineConfig.from_settings(positions, str(plugboard))


def parse_cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a Unigma daily key sheet")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument(
        "--pairs",
        type=int,
        default=DEFAULT_PAIRS,
        choices=range(0, MAX_PAIRS + 1),
        metavar=f"0-{MAX_PAIRS}",
        help=f"Number of plugboard pairs (default: {DEFAULT_PAIRS})",
    )
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("unigma_config.json"),
        help="Destination JSON file (default: unigma_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_cli(argv)
    cfg = generate(args.pairs, args.seed)
    save_config(cfg, args.outfile)
    print(f"✅  Wrote {args.outfile}\n"
        f"   positions   : {cfg.positions}\n"
        f"   plug pairs  : {len(cfg.plugboard.pairs)}")


if __name__ == "__main__":
    main()
