# Bounded-depth lookahead over free-turn chains (STATE-BASED, single player)
from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional, Tuple

from mancala.config import DEFAULT_MAX_DEPTH
from mancala.engine.core import P2, clone_state, legal_actions, play_turn, store_of

logger = logging.getLogger(__name__)


class LookaheadBot:
    """
    Greedy search over the bot's own free turns.

    A starting move is scored by playing it; if the turn grants a free turn and
    depth budget remains, the score is the best score over every continuation,
    otherwise it is the bot's store count in the resulting state. Opponent
    replies are never explored.
    """

    def __init__(self, player: int = P2, max_depth: int = DEFAULT_MAX_DEPTH):
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ValueError(f"max_depth must be a non-negative int, got {max_depth!r}")
        self.player = player
        self.max_depth = max_depth

    # ------------------------------- public API -------------------------------

    def choose_move(self, state: Dict) -> Optional[int]:
        move, _ = self.search(state)
        return move

    def search(self, state: Dict) -> Tuple[Optional[int], Optional[int]]:
        """(best starting move, its score); ties go to the first move in pit order."""
        root = self._as_bot_turn(state)
        moves = legal_actions(root, self.player)
        if not moves:
            return None, None

        best_move, best = moves[0], -math.inf
        for mv in moves:
            score = self._score(root, mv, 0)
            if score > best:
                best, best_move = score, mv
        logger.debug("lookahead(depth=%d) picked %s with score %s", self.max_depth, best_move, best)
        return best_move, best

    def evaluate_move(self, state: Dict, move: int) -> int:
        """Search score of a single starting move."""
        root = self._as_bot_turn(state)
        if move not in legal_actions(root, self.player):
            raise ValueError(f"move {move} is not legal for player {self.player}")
        return self._score(root, move, 0)

    # ------------------------------- recursion --------------------------------

    def _as_bot_turn(self, state: Dict) -> Dict:
        s = clone_state(state)
        s["current_player"] = self.player
        return s

    def _score(self, state: Dict, move: int, depth: int) -> int:
        # play_turn hands back a fresh state, so sibling branches never share a board
        outcome = play_turn(state, move)
        ns = outcome.state
        here = ns["pits"][store_of(self.player)]

        if not outcome.free_turn or outcome.game_over or depth >= self.max_depth:
            return here

        continuations: List[int] = legal_actions(ns, self.player)
        if not continuations:
            return here
        return max(self._score(ns, mv, depth + 1) for mv in continuations)

    def __repr__(self) -> str:
        return f"LookaheadBot(player={self.player}, max_depth={self.max_depth})"
