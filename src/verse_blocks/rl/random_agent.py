from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

import gymnasium as gym
import numpy as np

import verse_blocks.env  # noqa: F401  ensure registration


logger = logging.getLogger(__name__)


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    rng = random.Random(seed)
    env = gym.make("VerseBlocks-10x10-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer valid actions if available
        valid = np.argwhere(info["action_mask"])
        if valid.size:
            slot, y, x, r = (int(v) for v in valid[rng.randrange(len(valid))])
            action = (slot, x, y, r)
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("Episode %d finished: score=%d phrases=%d",
                        episodes, info["score"], info["completed_phrases"])
            obs, info = env.reset()
    env.close()
    logger.info("Random agent total reward: %.2f over %d steps", total_reward, steps)
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Roll out a uniformly random legal-move agent.")
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug-level logging")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
