# Game session: owns the authoritative state and drives human/bot turns
from __future__ import annotations
import logging
import random
from typing import Dict, List, Optional

from mancala.config import DEFAULT_STONES_PER_PIT
from mancala.engine.core import P1, M1, M2, TurnOutcome, new_game, other_player, play_turn
from mancala.io.registry import make_bot, normalize_mode, PVP

logger = logging.getLogger(__name__)


class GameSession:
    """
    One board, two local players.

    The state is replaced wholesale by each turn outcome and never handed out
    for mutation; `state` returns a copy.
    """

    def __init__(
        self,
        mode: str = PVP,
        stones_per_pit: int = DEFAULT_STONES_PER_PIT,
        human_player: int = P1,
        max_depth: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.mode = normalize_mode(mode)
        self.stones_per_pit = stones_per_pit
        self.human_player = human_player
        self.rng = rng or random.Random()
        self.bot = make_bot(self.mode, player=other_player(human_player), max_depth=max_depth, rng=self.rng)
        self.history: List[TurnOutcome] = []
        self.message = ""
        self._state: Dict = {}
        self.new_game()

    @property
    def state(self) -> Dict:
        s = dict(self._state)
        s["pits"] = list(self._state["pits"])
        return s

    @property
    def game_over(self) -> bool:
        return self._state["game_over"]

    def new_game(self, first_player: Optional[int] = None) -> Dict:
        self._state = new_game(self.stones_per_pit, first_player=first_player, rng=self.rng)
        self.history = []
        self.message = f"Player {self._state['current_player']} starts."
        logger.info("new %s game, player %s starts", self.mode, self._state["current_player"])
        return self.state

    def is_human_turn(self) -> bool:
        if self.game_over:
            return False
        return self.bot is None or self._state["current_player"] != self.bot.player

    def human_move(self, pit: int) -> TurnOutcome:
        if not self.is_human_turn():
            return TurnOutcome(state=self.state, invalid=True, game_over=self.game_over)
        return self._apply(pit)

    def bot_turn(self) -> Optional[TurnOutcome]:
        """Play one bot move if it is the bot's turn."""
        if self.bot is None or self.game_over or self._state["current_player"] != self.bot.player:
            return None
        move = self.bot.choose_move(self._state)
        if move is None:
            return None
        return self._apply(move)

    def play_bots(self) -> List[TurnOutcome]:
        """Bot moves (free turns included) until a human is to move or the game ends."""
        played = []
        while True:
            outcome = self.bot_turn()
            if outcome is None:
                return played
            played.append(outcome)

    def _apply(self, pit: int) -> TurnOutcome:
        outcome = play_turn(self._state, pit)
        if outcome.invalid:
            return outcome
        self._state = outcome.state
        self.history.append(outcome)
        self.message = self._describe(outcome)
        return outcome

    def _describe(self, outcome: TurnOutcome) -> str:
        if outcome.game_over:
            p1, p2 = outcome.state["pits"][M1], outcome.state["pits"][M2]
            if outcome.winner is None:
                return f"Draw ({p1}-{p2})"
            return f"Player {outcome.winner} wins! ({p1}-{p2})"
        if outcome.free_turn:
            return "Free turn! Play again."
        if outcome.captured:
            return f"Captured {outcome.captured} stones."
        return f"Player {outcome.state['current_player']} to move."
