import argparse
import logging
import random
import time
from itertools import product
from typing import Dict, List, Optional

import pandas as pd
from tqdm import tqdm

from mancala import config
from mancala.agents.lookahead import LookaheadBot
from mancala.agents.random_bot import RandomBot
from mancala.engine.core import M1, M2, P1, P2, new_game, play_turn

logger = logging.getLogger(__name__)

def random_strategy(player, rng, depth):
    return RandomBot(player=player, rng=rng)

def lookahead_strategy(player, rng, depth):
    return LookaheadBot(player=player, max_depth=depth)

strategies = [
    {"name": "Random", "function": random_strategy},
    {"name": "Lookahead", "function": lookahead_strategy},
]

def simulate_game(player1_strategy, player2_strategy, stones_per_pit=config.DEFAULT_STONES_PER_PIT,
                  first_player=None, rng=None, depth=config.DEFAULT_MAX_DEPTH):
    """Simulate a game between two strategies."""
    rng = rng or random.Random()
    bots = {
        P1: player1_strategy["function"](P1, rng, depth),
        P2: player2_strategy["function"](P2, rng, depth),
    }

    start_time = time.time()
    state = new_game(stones_per_pit, first_player=first_player, rng=rng)
    moves_count = 0

    while not state["game_over"]:
        move = bots[state["current_player"]].choose_move(state)
        if move is None:
            # only reachable on a board the sweep has already emptied
            break
        outcome = play_turn(state, move)
        if outcome.invalid:
            raise RuntimeError(f"player {state['current_player']} bot picked illegal move {move}")
        state = outcome.state
        moves_count += 1

    p1_score = state["pits"][M1]
    p2_score = state["pits"][M2]
    return {
        "player1": player1_strategy["name"],
        "player2": player2_strategy["name"],
        "p1_score": p1_score,
        "p2_score": p2_score,
        "winner": "Draw" if p1_score == p2_score else ("Player1" if p1_score > p2_score else "Player2"),
        "moves": moves_count,
        "time": time.time() - start_time
    }

def run_simulations(pairs=None, num_games=100, stones_per_pit=config.DEFAULT_STONES_PER_PIT,
                    depth=config.DEFAULT_MAX_DEPTH, seed: Optional[int] = None) -> pd.DataFrame:
    """Play `num_games` per strategy pairing and collect one row per game."""
    rng = random.Random(seed)
    pairs = list(pairs) if pairs is not None else list(product(strategies, strategies))
    results: List[Dict] = []

    with tqdm(total=len(pairs) * num_games, desc="Overall Progress", disable=num_games < 10) as progress:
        for player1_strat, player2_strat in pairs:
            for _ in range(num_games):
                result = simulate_game(player1_strat, player2_strat, stones_per_pit=stones_per_pit,
                                       rng=rng, depth=depth)
                results.append({
                    "Player1_Strategy": result["player1"],
                    "Player2_Strategy": result["player2"],
                    "Player1_Score": result["p1_score"],
                    "Player2_Score": result["p2_score"],
                    "Winner": result["winner"],
                    "Moves": result["moves"],
                    "Time_Seconds": round(result["time"], 3)
                })
                progress.update(1)

    return pd.DataFrame(results)

def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Win/draw rates per pairing."""
    return (df.groupby(["Player1_Strategy", "Player2_Strategy"])["Winner"]
              .value_counts(normalize=True)
              .unstack(fill_value=0.0))

def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Mancala bots against each other.")
    parser.add_argument("--games", type=int, default=100, help="games per strategy pairing")
    parser.add_argument("--depth", type=int, default=config.DEFAULT_MAX_DEPTH, help="lookahead max depth")
    parser.add_argument("--stones", type=int, default=config.DEFAULT_STONES_PER_PIT, help="stones per pit")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--out", default=None, help="write per-game rows to this CSV")
    args = parser.parse_args(argv)

    config.setup_logging()
    df = run_simulations(num_games=args.games, stones_per_pit=args.stones, depth=args.depth, seed=args.seed)
    if args.out:
        df.to_csv(args.out, index=False)
        logger.info("wrote %d rows to %s", len(df), args.out)

    print("\nSummary Statistics:")
    print(summarize(df))
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
