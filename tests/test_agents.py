# tests/test_agents.py
import copy
import random

import pytest

from mancala.agents.lookahead import LookaheadBot
from mancala.agents.random_bot import RandomBot
from mancala.engine.core import P1, P2, legal_actions, new_game, pits_of, play_turn


def positions(seed, count=12):
    """States reached by random play, some with P1 and some with P2 to move."""
    rng = random.Random(seed)
    state = new_game(4, rng=rng)
    out = []
    while not state["game_over"] and len(out) < count:
        out.append(state)
        state = play_turn(state, rng.choice(legal_actions(state))).state
    return out


def test_random_bot_returns_own_nonempty_pit():
    bot = RandomBot(player=P2, rng=random.Random(0))
    for s in positions(1) + positions(2):
        mv = bot.choose_move(s)
        assert mv in pits_of(P2)
        assert s["pits"][mv] > 0

def test_random_bot_covers_all_moves(make_state):
    bot = RandomBot(player=P1, rng=random.Random(5))
    s = make_state({0: 1, 3: 2, 6: 4, 9: 1})
    assert {bot.choose_move(s) for _ in range(60)} == {0, 3, 6}

def test_random_bot_none_without_moves(make_state):
    s = make_state({9: 3, 14: 4}, player=P1)
    assert RandomBot(player=P1).choose_move(s) is None
    s["game_over"] = True
    assert RandomBot(player=P2).choose_move(s) is None

def test_lookahead_follows_free_turn_into_capture(make_state):
    # 7 -> store (free turn); then 11 sows 10, 9 and captures pit 2 (4 stones)
    s = make_state({7: 1, 11: 2, 0: 3, 2: 4}, player=P2)
    deep = LookaheadBot(player=P2, max_depth=8)
    assert deep.evaluate_move(s, 7) == 6
    assert deep.evaluate_move(s, 11) == 5
    assert deep.search(s) == (7, 6)

    # with no budget for continuations the direct capture looks better
    shallow = LookaheadBot(player=P2, max_depth=0)
    assert shallow.evaluate_move(s, 7) == 1
    assert shallow.search(s) == (11, 5)

def test_lookahead_ties_go_to_first_move(make_state):
    s = make_state({8: 1, 10: 1, 3: 2}, player=P2)
    assert LookaheadBot(player=P2).search(s) == (8, 0)

def test_lookahead_does_not_mutate_state():
    for s in positions(7):
        before = copy.deepcopy(s)
        LookaheadBot(player=s["current_player"], max_depth=4).choose_move(s)
        assert s == before

def test_lookahead_plays_for_its_own_player(make_state):
    # P1 to move, but the bot analyses its own (P2) moves
    s = make_state({0: 2, 7: 1, 9: 2}, player=P1)
    mv = LookaheadBot(player=P2, max_depth=2).choose_move(s)
    assert mv in (7, 9)

def test_lookahead_none_without_moves(make_state):
    s = make_state({1: 1, 15: 2}, player=P2)
    assert LookaheadBot(player=P2).choose_move(s) is None
    assert LookaheadBot(player=P2).search(s) == (None, None)

@pytest.mark.parametrize("depth", [-1, 1.5, "8", None, True])
def test_lookahead_rejects_bad_depth(depth):
    with pytest.raises(ValueError):
        LookaheadBot(max_depth=depth)

def test_evaluate_move_rejects_illegal(make_state):
    s = make_state({7: 1, 0: 1}, player=P2)
    with pytest.raises(ValueError):
        LookaheadBot(player=P2).evaluate_move(s, 8)

@pytest.mark.parametrize("seed", range(4))
def test_deeper_search_never_scores_lower(seed):
    for s in positions(seed, count=20):
        bot_player = s["current_player"]
        scores = [LookaheadBot(player=bot_player, max_depth=d).search(s)[1] for d in range(4)]
        assert scores == sorted(scores)

@pytest.mark.parametrize("seed", range(3))
def test_bots_only_pick_legal_moves(seed):
    rng = random.Random(seed)
    bots = {P1: RandomBot(player=P1, rng=rng), P2: LookaheadBot(player=P2, max_depth=3)}
    state = new_game(3, rng=rng)
    while not state["game_over"]:
        mv = bots[state["current_player"]].choose_move(state)
        assert mv in legal_actions(state)
        out = play_turn(state, mv)
        assert not out.invalid
        state = out.state
