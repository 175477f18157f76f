"""Gymnasium environment for block_drop."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="FallingBlock-12x15-v0",
    entry_point="block_drop.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["FallingBlock-12x15-v0"]
