# Uniform random bot (STATE-BASED)
from __future__ import annotations
import random
from typing import Dict, Optional

from mancala.engine.core import P2, legal_actions


class RandomBot:
    """Uniformly chooses one of its player's non-empty pits; None if there is none."""

    def __init__(self, player: int = P2, rng: Optional[random.Random] = None):
        self.player = player
        self.rng = rng or random.Random()

    def choose_move(self, state: Dict) -> Optional[int]:
        moves = legal_actions(state, self.player)
        if not moves:
            return None
        return self.rng.choice(moves)

    def __repr__(self) -> str:
        return f"RandomBot(player={self.player})"
