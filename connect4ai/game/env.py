"""
env.py - Gymnasium environment for playing against a connect4ai opponent

The agent plays one side of a GameSession and the selected difficulty plays
the other. Each step is one agent move followed, if the game is still on,
by the opponent's reply.
"""

import random
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4ai.ai.strategies import Difficulty
from connect4ai.debug import debug
from connect4ai.game.rules import valid_moves
from connect4ai.game.session import GameSession, GameState
from connect4ai.utils import ROWS, COLS, Player


class ConnectFourEnv(gym.Env):
    """
    Connect Four against a fixed AI opponent, following the Gymnasium API.

    Observations are the raw ROWS x COLS grid (0 empty, 1 and 2 players).
    The agent is Player.ONE when it moves first and Player.TWO otherwise.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    reward_win = 1.0
    reward_lose = -1.0
    reward_draw = 0.1
    reward_invalid_move = -0.5
    reward_step = -0.01

    def __init__(self, difficulty=Difficulty.MEDIUM, render_mode: Optional[str] = None,
                 agent_first: bool = True, depth: Optional[int] = None):
        """
        Args:
            difficulty: Opponent difficulty
            render_mode: "ascii", "human" or None
            agent_first: Whether the agent makes the opening move
            depth: Search depth for a hard opponent
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.render_mode = render_mode
        self.difficulty = Difficulty.parse(difficulty)
        self.agent_first = agent_first
        self._rng = random.Random()

        agent = Player.ONE if agent_first else Player.TWO
        self.session = GameSession(difficulty=self.difficulty, human_player=agent,
                                   human_first=agent_first, rng=self._rng, depth=depth)

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(seed)

        debug.debug("Resetting environment", "env")
        self.session.reset()
        if not self.agent_first:
            self.session.ai_move()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's move and the opponent's reply.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        if self.session.state.is_game_over() or action not in valid_moves(self.session.board):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.session.human_move(action)
        if not self.session.state.is_game_over():
            self.session.ai_move()

        state = self.session.state
        terminated = state.is_game_over()
        if state == GameState.PLAYER_WIN:
            reward = self.reward_win
        elif state == GameState.AI_WIN:
            reward = self.reward_lose
        elif state == GameState.DRAW:
            reward = self.reward_draw
        else:
            reward = self.reward_step

        if terminated:
            debug.info(f"Episode finished: {state.value}", "env")
        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.session.board.render()
        if self.render_mode == "human":
            print(self.session.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.session.board.to_array()

    def _get_info(self) -> Dict[str, Any]:
        last = self.session.last_move
        return {
            'valid_moves': valid_moves(self.session.board),
            'game_state': self.session.state.value,
            'winning_line': self.session.winning_cells,
            'last_move': (last.row, last.column) if last else None,
            'moves_made': len(self.session.moves),
        }

    def close(self):
        pass
