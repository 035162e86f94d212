from __future__ import annotations

import abc

from renjuai.game.board import GomokuGameState
from renjuai.game.types import Point


class Agent(abc.ABC):
    """Something that picks a point to play for the side to move."""

    @abc.abstractmethod
    def select_move(self, game_state: GomokuGameState) -> Point:
        """Return the point where this agent wants to play.

        The game state must be left exactly as it was passed in.
        """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def last_search_summary(self) -> str:
        """One-line description of the most recent search, for display."""
        return ""
