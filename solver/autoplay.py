from __future__ import annotations

import argparse
import json
import logging
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from klondike.Core import Core, GameConfig
from solver.hint import find_hint

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 2_000


@dataclass(slots=True)
class PlayResult:
    """Outcome of following the hint chain until the game ends or stalls."""

    status: str
    steps: int
    moves: int
    foundation_cards: int
    elapsed_ms: float
    seed: Optional[int] = None
    actions: tuple[str, ...] = ()

    @property
    def won(self) -> bool:
        return self.status == "won"

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "status": self.status,
            "steps": self.steps,
            "moves": self.moves,
            "foundation_cards": self.foundation_cards,
            "elapsed_ms": self.elapsed_ms,
            "actions": list(self.actions),
        }


def play_game(core: Core, max_steps: int = DEFAULT_MAX_STEPS, record_actions: bool = False) -> PlayResult:
    """
    Greedy auto-solve: apply the first hint until the game is won, no hint is
    left, a position repeats or ``max_steps`` actions have been played.
    """
    started = time.perf_counter()
    seen = {tuple(core.stateLines())}
    actions: list[str] = []
    steps = 0
    status = "limit_reached"

    while not core.gameEnded and steps < max_steps:
        hint = find_hint(core)
        if hint is None:
            status = "no_moves"
            break
        if not core.applyHint(hint):
            raise RuntimeError(f"core rejected its own hint {hint.to_notation()}")
        steps += 1
        if record_actions:
            actions.append(hint.to_notation())
        key = tuple(core.stateLines())
        if key in seen:
            status = "repeated_position"
            break
        seen.add(key)

    if core.gameEnded:
        status = "won"
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 3)
    logger.debug("autoplay finished: %s after %d steps", status, steps)
    return PlayResult(
        status=status,
        steps=steps,
        moves=core.moves,
        foundation_cards=core.foundationCount(),
        elapsed_ms=elapsed_ms,
        actions=tuple(actions),
    )


def play_seed(seed: int, max_steps: int = DEFAULT_MAX_STEPS, record_actions: bool = False) -> PlayResult:
    cfg = GameConfig()
    cfg.seed = seed
    core = Core()
    core.newGame(cfg)
    result = play_game(core, max_steps=max_steps, record_actions=record_actions)
    result.seed = seed
    return result


def play_seeds(seeds: Iterable[int], max_steps: int = DEFAULT_MAX_STEPS, record_actions: bool = False) -> list[PlayResult]:
    return [play_seed(seed, max_steps=max_steps, record_actions=record_actions) for seed in seeds]


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play seeded Klondike deals by following the hint chain.")
    parser.add_argument("--seed", type=int, action="append", default=[], help="Seed to play; can be repeated.")
    parser.add_argument("--start-seed", type=int, default=None, help="First seed of a consecutive range.")
    parser.add_argument("--count", type=int, default=1, help="How many seeds to play from --start-seed.")
    parser.add_argument("--max-steps", type=int, default=DEFAULT_MAX_STEPS, help="Action limit per game.")
    parser.add_argument("--actions", action="store_true", help="Include the played actions in the output.")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print json output.")
    args = parser.parse_args(argv)
    if not args.seed and args.start_seed is None:
        parser.error("give at least one --seed or a --start-seed")
    return args


def main(argv=None) -> None:
    args = _parse_args(argv)
    seeds = list(args.seed)
    if args.start_seed is not None:
        seeds.extend(range(args.start_seed, args.start_seed + args.count))

    results = play_seeds(seeds, max_steps=args.max_steps, record_actions=args.actions)
    payload = [result.to_dict() for result in results]
    if len(payload) == 1:
        payload = payload[0]

    if args.pretty:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(payload, ensure_ascii=False))


if __name__ == "__main__":
    main()
