# src/mancala/io/registry.py
import random
from importlib.metadata import PackageNotFoundError, version
from typing import Dict, List, Optional

from mancala.agents.base import Bot
from mancala.agents.lookahead import LookaheadBot
from mancala.agents.random_bot import RandomBot
from mancala.config import DEFAULT_MAX_DEPTH, DEFAULT_STONES_PER_PIT
from mancala.engine.core import P2, PITS_PER_SIDE
from mancala.utils.exceptions import UnknownModeError

try:
    __version__ = version("mancala")
except PackageNotFoundError:
    # running from a source checkout without `pip install -e .`
    __version__ = "0+unknown"

# ---------------------------------------------------------------------
# Modes / agents
# ---------------------------------------------------------------------
PVP = "pvp"
PVC_RANDOM = "pvc"
PVC_SEARCH = "pvc-dfs"

MODES = {
    PVP: "human-vs-human",
    PVC_RANDOM: "human-vs-random-bot",
    PVC_SEARCH: "human-vs-search-bot",
}

_MODE_ALIASES = {
    "pvp": PVP, "human-vs-human": PVP, "human": PVP, "none": PVP,
    "pvc": PVC_RANDOM, "human-vs-random-bot": PVC_RANDOM, "random": PVC_RANDOM,
    "pvc-dfs": PVC_SEARCH, "human-vs-search-bot": PVC_SEARCH, "dfs": PVC_SEARCH,
    "search": PVC_SEARCH, "lookahead": PVC_SEARCH,
}

AGENTS = ("random", "dfs")

# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def normalize_mode(mode: Optional[str]) -> str:
    key = (mode or PVP).strip().lower().replace("_", "-")
    try:
        return _MODE_ALIASES[key]
    except KeyError:
        raise UnknownModeError(f"Unknown mode {mode!r}. Known: {sorted(MODES)}") from None

def current_meta() -> Dict:
    return {
        "name": "mancala",
        "version": __version__,
        "pits_per_side": PITS_PER_SIDE,
        "stones_per_pit": DEFAULT_STONES_PER_PIT,
        "max_depth": DEFAULT_MAX_DEPTH,
        "modes": MODES,
    }

def list_modes() -> List[Dict]:
    return [{"mode": k, "description": v} for k, v in MODES.items()]

# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------
def make_bot(
    mode: Optional[str],
    player: int = P2,
    max_depth: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Bot]:
    """Bot playing `player` for the given mode; None for human-vs-human."""
    mode = normalize_mode(mode)
    if mode == PVC_RANDOM:
        return RandomBot(player=player, rng=rng)
    if mode == PVC_SEARCH:
        return LookaheadBot(player=player, max_depth=DEFAULT_MAX_DEPTH if max_depth is None else max_depth)
    return None

def pick_action(state: Dict, agent: str, max_depth: Optional[int] = None,
                rng: Optional[random.Random] = None) -> Optional[int]:
    """Move for state['current_player'] chosen by the named agent."""
    mode = normalize_mode(agent)
    if mode == PVP:
        raise UnknownModeError(f"Agent {agent!r} does not pick moves. Known: {list(AGENTS)}")
    bot = make_bot(mode, player=state["current_player"], max_depth=max_depth, rng=rng)
    return bot.choose_move(state)
