# src/mancala/api/routes.py
import logging

from flask_smorest import Blueprint, abort
from marshmallow import Schema, fields, validate, EXCLUDE

from mancala.config import DEFAULT_STONES_PER_PIT
from mancala.engine.core import (
    BOARD_SIZE, PITS_PER_SIDE, legal_actions, new_game, opp_store_of, play_turn, store_of, winner_of,
)
from mancala.io.registry import AGENTS, current_meta, list_modes, pick_action
from mancala.utils.exceptions import InvalidPitError, InvalidStateError

logger = logging.getLogger(__name__)

bp = Blueprint("mancala", __name__, url_prefix="/api")

# ---------- Schemas ----------
class StateSchema(Schema):
    class Meta: unknown = EXCLUDE
    pits = fields.List(fields.Integer(strict=True, validate=validate.Range(min=0)), required=True,
                       validate=validate.Length(equal=BOARD_SIZE))
    current_player = fields.Integer(required=True, validate=validate.OneOf([1, 2]))
    game_over = fields.Boolean(load_default=False)
    stones_per_pit = fields.Integer(validate=validate.Range(min=1))

class NewGameReqSchema(Schema):
    class Meta: unknown = EXCLUDE
    stones_per_pit = fields.Integer(load_default=DEFAULT_STONES_PER_PIT, validate=validate.Range(min=1))
    first_player = fields.Integer(load_default=None, allow_none=True, validate=validate.OneOf([1, 2]))

class ApplyReqSchema(Schema):
    class Meta: unknown = EXCLUDE
    state  = fields.Nested(StateSchema, required=True)
    action = fields.Integer(load_default=None, allow_none=True)

class MoveReqSchema(Schema):
    class Meta: unknown = EXCLUDE
    state     = fields.Nested(StateSchema, required=True)
    agent     = fields.String(load_default="dfs", validate=validate.OneOf(list(AGENTS)))
    max_depth = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0, max=16))

class MoveRespSchema(Schema):
    action     = fields.Integer(allow_none=True)
    next_state = fields.Nested(StateSchema)
    free_turn  = fields.Boolean()
    game_over  = fields.Boolean()
    winner     = fields.Integer(allow_none=True)
    captured   = fields.Integer()
    landing    = fields.Integer(allow_none=True)
    events     = fields.List(fields.Dict())
    reward     = fields.Float()
    done       = fields.Boolean()
# -----------------------------

def _resolve(state, action):
    try:
        outcome = play_turn(state, action)
    except InvalidPitError as e:
        abort(400, message=str(e))
    except InvalidStateError as e:
        abort(422, message=str(e))
    if outcome.invalid:
        abort(400, message=f"Illegal move {action}. Legal: {legal_actions(state)}")

    mover = state["current_player"]
    pits = outcome.state["pits"]
    reward = float(pits[store_of(mover)] - pits[opp_store_of(mover)]) if outcome.game_over else 0.0
    return {
        "action": action,
        "next_state": outcome.state,
        "free_turn": outcome.free_turn,
        "game_over": outcome.game_over,
        "winner": outcome.winner,
        "captured": outcome.captured,
        "landing": outcome.landing,
        "events": outcome.events,
        "reward": reward,
        "done": outcome.game_over,
    }

@bp.route("/health")
@bp.response(200, Schema.from_dict({"status": fields.String(), "model": fields.Dict()})())
def health():
    return {"status": "ok", "model": current_meta()}

@bp.route("/modes")
@bp.response(200, Schema.from_dict({"modes": fields.List(fields.Dict()),
                                    "pits_per_side": fields.Integer()})())
def modes():
    return {"modes": list_modes(), "pits_per_side": PITS_PER_SIDE}

@bp.route("/newgame", methods=["POST"])
@bp.arguments(NewGameReqSchema)
@bp.response(200, Schema.from_dict({"state": fields.Nested(StateSchema)})())
def newgame(req):
    state = new_game(req["stones_per_pit"], first_player=req.get("first_player"))
    logger.info("new game: %s stones per pit, player %s starts", req["stones_per_pit"], state["current_player"])
    return {"state": state}

@bp.route("/apply", methods=["POST"])  # human move
@bp.arguments(ApplyReqSchema)
@bp.response(200, MoveRespSchema)
def apply(req):
    a = req.get("action")
    if a is None:
        abort(400, message=f"Missing action. Legal: {legal_actions(req['state'])}")
    resp = _resolve(req["state"], a)
    logger.info("player %s played %s (free_turn=%s, game_over=%s)",
                req["state"]["current_player"], a, resp["free_turn"], resp["game_over"])
    return resp

@bp.route("/move", methods=["POST"])   # bot move
@bp.arguments(MoveReqSchema)
@bp.response(200, MoveRespSchema)
def move(req):
    state = req["state"]
    a = pick_action(state, req["agent"], max_depth=req.get("max_depth"))
    if a is None:
        return {"action": None, "next_state": state, "free_turn": False,
                "game_over": state.get("game_over", False), "winner": winner_of(state),
                "captured": 0, "landing": None, "events": [], "reward": 0.0,
                "done": state.get("game_over", False)}
    resp = _resolve(state, a)
    logger.info("%s bot played %s for player %s", req["agent"], a, state["current_player"])
    return resp
