# Mancala core engine (state-based public API)
# State shape:
# {
#   "pits": [int]*16,          # 0..6 player 1 pits, 7..13 player 2 pits,
#                              # 14 = player 1 store, 15 = player 2 store
#   "current_player": 1 | 2,
#   "game_over": bool,
#   "stones_per_pit": int      # optional, carried along for new games
# }

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from mancala.config import DEFAULT_STONES_PER_PIT
from mancala.utils.exceptions import IllegalMoveError, InvalidPitError, InvalidStateError

logger = logging.getLogger(__name__)

P1 = 1
P2 = 2

PITS_PER_SIDE = 7
BOARD_SIZE = 16

P1_PITS = tuple(range(0, PITS_PER_SIDE))
P2_PITS = tuple(range(PITS_PER_SIDE, 2 * PITS_PER_SIDE))
M1 = 14
M2 = 15

# Sowing cycle: own pits, own store, opponent pits (walked backwards), opponent store.
ORDER = P1_PITS + (M1,) + tuple(reversed(P2_PITS)) + (M2,)
_NEXT = {v: ORDER[(i + 1) % len(ORDER)] for i, v in enumerate(ORDER)}

# ---------------------------------------------------------------------
# Pit predicates
# ---------------------------------------------------------------------

def is_small_pit(i: int) -> bool:
    return 0 <= i < 2 * PITS_PER_SIDE

def owner_of(i: int) -> Optional[int]:
    """Owner of a small pit or store, None for anything off the board."""
    if i in P1_PITS or i == M1:
        return P1
    if i in P2_PITS or i == M2:
        return P2
    return None

def is_own_small_pit(player: int, i: int) -> bool:
    return is_small_pit(i) and owner_of(i) == player

def opposite_of(i: int) -> Optional[int]:
    if i in P1_PITS:
        return i + PITS_PER_SIDE
    if i in P2_PITS:
        return i - PITS_PER_SIDE
    return None

def store_of(player: int) -> int:
    return M1 if player == P1 else M2

def opp_store_of(player: int) -> int:
    return M2 if player == P1 else M1

def other_player(player: int) -> int:
    return P2 if player == P1 else P1

def pits_of(player: int) -> Tuple[int, ...]:
    return P1_PITS if player == P1 else P2_PITS

def next_index(i: int) -> int:
    """Cyclic successor of `i` in sowing order (no store skipping)."""
    return _NEXT[i]

# ---------------------------------------------------------------------
# State helpers
# ---------------------------------------------------------------------

def new_game(
    stones_per_pit: int = DEFAULT_STONES_PER_PIT,
    first_player: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Dict:
    if isinstance(stones_per_pit, bool) or not isinstance(stones_per_pit, int) or stones_per_pit <= 0:
        raise InvalidStateError(f"stones_per_pit must be a positive int, got {stones_per_pit!r}")
    if first_player is None:
        first_player = (rng or random).choice((P1, P2))
    elif first_player not in (P1, P2):
        raise InvalidStateError(f"first_player must be 1 or 2, got {first_player!r}")

    pits = [stones_per_pit] * (2 * PITS_PER_SIDE) + [0, 0]
    return {
        "pits": pits,
        "current_player": first_player,
        "game_over": False,
        "stones_per_pit": stones_per_pit,
    }

def clone_state(state: Dict) -> Dict:
    s = dict(state)
    s["pits"] = list(state["pits"])
    return s

def validate_state(state: Dict) -> None:
    """Raise InvalidStateError unless `state` is a well-formed game state."""
    if not isinstance(state, dict):
        raise InvalidStateError(f"state must be a dict, got {type(state).__name__}")
    pits = state.get("pits")
    if not isinstance(pits, (list, tuple)) or len(pits) != BOARD_SIZE:
        raise InvalidStateError(f"board must hold {BOARD_SIZE} counters")
    for i, n in enumerate(pits):
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidStateError(f"pit {i} holds {n!r}; counters must be non-negative ints")
    if state.get("current_player") not in (P1, P2):
        raise InvalidStateError(f"current_player must be 1 or 2, got {state.get('current_player')!r}")
    if not isinstance(state.get("game_over", False), bool):
        raise InvalidStateError("game_over must be a bool")

def total_stones(state: Dict) -> int:
    return sum(state["pits"])

def is_terminal_state(state: Dict) -> bool:
    pits = state["pits"]
    return all(pits[i] == 0 for i in P1_PITS) or all(pits[i] == 0 for i in P2_PITS)

def legal_actions(state: Dict, player: Optional[int] = None) -> List[int]:
    if state.get("game_over"):
        return []
    if player is None:
        player = state["current_player"]
    return [i for i in pits_of(player) if state["pits"][i] > 0]

def winner_of(state: Dict) -> Optional[int]:
    """Player with the bigger store once the game is over; None otherwise or on a draw."""
    if not state.get("game_over"):
        return None
    p1, p2 = state["pits"][M1], state["pits"][M2]
    if p1 > p2:
        return P1
    if p2 > p1:
        return P2
    return None

def is_draw(state: Dict) -> bool:
    return bool(state.get("game_over")) and state["pits"][M1] == state["pits"][M2]

# ---------------------------------------------------------------------
# Transition function
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class TurnOutcome:
    state: Dict
    invalid: bool = False
    free_turn: bool = False
    game_over: bool = False
    winner: Optional[int] = None
    captured: int = 0
    landing: Optional[int] = None
    events: List[Dict] = field(default_factory=list)

def _sow(pits: List[int], start: int, player: int, events: List[Dict]) -> int:
    """Empty `start` and sow its stones, skipping the opponent's store. Returns the landing index."""
    in_hand = pits[start]
    pits[start] = 0
    events.append({"type": "pickup", "pit": start, "count": in_hand})

    skip = opp_store_of(player)
    pos = _NEXT[start]
    while in_hand > 0:
        if pos == skip:
            pos = _NEXT[pos]
            continue
        pits[pos] += 1
        in_hand -= 1
        events.append({"type": "drop", "pit": pos, "count": pits[pos], "in_hand": in_hand})
        if in_hand > 0:
            pos = _NEXT[pos]
    return pos

def _sweep(pits: List[int], events: List[Dict]) -> None:
    p1_remain = sum(pits[i] for i in P1_PITS)
    p2_remain = sum(pits[i] for i in P2_PITS)
    for i in P1_PITS + P2_PITS:
        pits[i] = 0
    pits[M1] += p1_remain
    pits[M2] += p2_remain
    events.append({"type": "sweep", "p1": p1_remain, "p2": p2_remain})

def play_turn(state: Dict, start_index: int) -> TurnOutcome:
    """
    Resolve a whole turn for state['current_player'] starting from `start_index`.

    The caller's state is never touched; the outcome carries a fresh state.
    Illegal moves (game over, opponent's pit, empty pit) come back with
    invalid=True and an unchanged copy. Indices outside 0..13 raise InvalidPitError.
    """
    validate_state(state)
    if isinstance(start_index, bool) or not isinstance(start_index, int) or not is_small_pit(start_index):
        raise InvalidPitError(f"start pit must be an int in 0..{2 * PITS_PER_SIDE - 1}, got {start_index!r}")

    new_state = clone_state(state)
    new_state["game_over"] = bool(state.get("game_over", False))
    pits = new_state["pits"]
    player = new_state["current_player"]

    if new_state["game_over"] or not is_own_small_pit(player, start_index) or pits[start_index] == 0:
        logger.debug("rejected move %s for player %s", start_index, player)
        return TurnOutcome(state=new_state, invalid=True, game_over=new_state["game_over"],
                           winner=winner_of(new_state))

    events: List[Dict] = []

    # sowing, relaying out of any small pit that was already occupied
    landing = _sow(pits, start_index, player, events)
    while is_small_pit(landing) and pits[landing] > 1:
        landing = _sow(pits, landing, player, events)

    free_turn = landing == store_of(player)
    captured = 0

    # capture
    if not free_turn and is_own_small_pit(player, landing) and pits[landing] == 1:
        opp = opposite_of(landing)
        if pits[opp] > 0:
            captured = pits[opp] + 1
            pits[opp] = 0
            pits[landing] = 0
            pits[store_of(player)] += captured
            events.append({"type": "capture", "pit": landing, "opposite": opp,
                           "count": captured, "store": store_of(player)})

    # terminal sweep
    if is_terminal_state(new_state):
        _sweep(pits, events)
        new_state["game_over"] = True
        logger.debug("game over: stores %s-%s", pits[M1], pits[M2])

    if not free_turn and not new_state["game_over"]:
        new_state["current_player"] = other_player(player)

    return TurnOutcome(
        state=new_state,
        invalid=False,
        free_turn=free_turn,
        game_over=new_state["game_over"],
        winner=winner_of(new_state),
        captured=captured,
        landing=landing,
        events=events,
    )

def step(state: Dict, action: int) -> Tuple[Dict, float, bool]:
    """
    Apply one move for state['current_player'] from pit index `action`.
    Returns: (next_state, reward, done)
      - reward: 0.0 for non-terminal; at terminal, store difference from mover's perspective.
    """
    outcome = play_turn(state, action)
    if outcome.invalid:
        raise IllegalMoveError(action, legal_actions(state))
    mover = state["current_player"]
    pits = outcome.state["pits"]
    reward = float(pits[store_of(mover)] - pits[opp_store_of(mover)]) if outcome.game_over else 0.0
    return outcome.state, reward, outcome.game_over

def replay_events(pits: List[int], events: List[Dict]) -> List[int]:
    """Apply a recorded event trace to a copy of `pits` (what an animated board does)."""
    board = list(pits)
    for ev in events:
        kind = ev["type"]
        if kind == "pickup":
            board[ev["pit"]] = 0
        elif kind == "drop":
            board[ev["pit"]] += 1
        elif kind == "capture":
            board[ev["pit"]] = 0
            board[ev["opposite"]] = 0
            board[ev["store"]] += ev["count"]
        elif kind == "sweep":
            for i in P1_PITS + P2_PITS:
                board[i] = 0
            board[M1] += ev["p1"]
            board[M2] += ev["p2"]
        else:
            raise ValueError(f"unknown event type {kind!r}")
    return board
