# Bot capability shared by every strategy
from __future__ import annotations
from typing import Dict, Optional, Protocol


class Bot(Protocol):
    player: int

    def choose_move(self, state: Dict) -> Optional[int]:
        """Pit index to play for `self.player`, or None when it has no legal move."""
        ...
