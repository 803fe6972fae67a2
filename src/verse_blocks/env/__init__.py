"""Gymnasium environments for Verse Blocks."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="VerseBlocks-10x10-v0",
    entry_point="verse_blocks.env.verse_blocks_env:VerseBlocksEnv",
)
