from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_drop.game import Action, GameConfig, GameSession


class FallingBlockEnv(gym.Env):
    """Drives a ``GameSession`` one discrete command per step.

    Observation is the board with the falling piece overlaid (0 empty,
    1 landed, 2 falling). Reward is the score gained by the step.
    Gravity is not simulated between steps; ``SOFT_DROP`` moves the piece down.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = GameSession(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        rows, cols = self.game.config.rows, self.game.config.cols
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, cols), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.restart()
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        self.game.step(Action(int(action)))
        self._steps += 1

        reward = float(self.game.score - score_before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            state = self.game.get_state()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            colors = {0: (0, 0, 0), 1: (101, 66, 50), 2: (247, 147, 26)}
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = colors[int(state[y, x])]
            return img
        return None

    def close(self) -> None:
        pass
