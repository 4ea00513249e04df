# tests/test_api.py
def _state(counts, player=1, game_over=False):
    pits = [0] * 16
    for i, n in counts.items():
        pits[i] = n
    return {"pits": pits, "current_player": player, "game_over": game_over}

def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    data = res.get_json()
    assert data.get("status") == "ok"
    assert data["model"]["pits_per_side"] == 7

def test_modes(client):
    res = client.get("/api/modes")
    assert res.status_code == 200
    assert {m["mode"] for m in res.get_json()["modes"]} == {"pvp", "pvc", "pvc-dfs"}

def test_newgame_defaults(client):
    r = client.post("/api/newgame", json={})
    assert r.status_code == 200
    s = r.get_json()["state"]
    assert s["pits"] == [7] * 14 + [0, 0]
    assert s["current_player"] in (1, 2)
    assert s["game_over"] is False

def test_newgame_custom(client):
    r = client.post("/api/newgame", json={"stones_per_pit": 4, "first_player": 2})
    s = r.get_json()["state"]
    assert s["pits"][:14] == [4] * 14
    assert s["current_player"] == 2

def test_newgame_rejects_zero_stones(client):
    r = client.post("/api/newgame", json={"stones_per_pit": 0})
    assert r.status_code == 422

def test_apply_free_turn(client):
    s = _state({4: 3, 0: 1, 10: 2})
    r = client.post("/api/apply", json={"state": s, "action": 4})
    assert r.status_code == 200
    payload = r.get_json()
    assert payload["free_turn"] is True
    assert payload["next_state"]["current_player"] == 1
    assert payload["next_state"]["pits"][14] == 1
    assert [e["type"] for e in payload["events"]] == ["pickup", "drop", "drop", "drop"]
    assert payload["done"] is False

def test_apply_game_ending_capture(client):
    s = _state({13: 1, 2: 3, 5: 1, 14: 4, 15: 4}, player=2)
    r = client.post("/api/apply", json={"state": s, "action": 13})
    payload = r.get_json()
    assert payload["game_over"] is True
    assert payload["captured"] == 2
    assert payload["winner"] == 1
    assert payload["reward"] == -1.0

def test_apply_illegal_move(client):
    s = _state({0: 1, 9: 2})
    r = client.post("/api/apply", json={"state": s, "action": 9})
    assert r.status_code == 400
    assert "Legal: [0]" in r.get_json()["message"]

def test_apply_missing_or_out_of_range_action(client):
    s = _state({0: 1, 9: 2})
    assert client.post("/api/apply", json={"state": s}).status_code == 400
    assert client.post("/api/apply", json={"state": s, "action": 15}).status_code == 400

def test_apply_malformed_board(client):
    s = _state({0: 1, 9: 2})
    s["pits"] = s["pits"][:15]
    r = client.post("/api/apply", json={"state": s, "action": 0})
    assert r.status_code == 422
    s = _state({0: 1, 9: 2})
    s["pits"][3] = -2
    assert client.post("/api/apply", json={"state": s, "action": 0}).status_code == 422

def test_newgame_and_bot_move(client):
    s = client.post("/api/newgame", json={"first_player": 2}).get_json()["state"]
    for agent in ("random", "dfs"):
        r = client.post("/api/move", json={"state": s, "agent": agent, "max_depth": 3})
        assert r.status_code == 200
        payload = r.get_json()
        assert payload["action"] in range(7, 14)
        assert sum(payload["next_state"]["pits"]) == 98

def test_bot_move_follows_free_turn(client):
    s = _state({7: 1, 11: 2, 0: 3, 2: 4}, player=2)
    r = client.post("/api/move", json={"state": s, "agent": "dfs"})
    payload = r.get_json()
    assert payload["action"] == 7
    assert payload["free_turn"] is True

def test_bot_move_on_finished_game(client):
    s = _state({14: 50, 15: 48}, player=2, game_over=True)
    r = client.post("/api/move", json={"state": s, "agent": "random"})
    assert r.status_code == 200
    payload = r.get_json()
    assert payload["action"] is None
    assert payload["next_state"]["pits"] == s["pits"]
    assert payload["winner"] == 1

def test_unknown_agent(client):
    s = _state({0: 1, 9: 2})
    r = client.post("/api/move", json={"state": s, "agent": "minimax"})
    assert r.status_code == 422

def test_openapi_served(client):
    r = client.get("/openapi.json")
    assert r.status_code == 200
    assert "/api/apply" in r.get_json()["paths"]

def test_only_documented_routes(app):
    rules = {str(r) for r in app.url_map.iter_rules()}
    assert "/debug/routes" not in rules
    assert {"/api/health", "/api/modes", "/api/newgame", "/api/apply", "/api/move",
            "/openapi.json", "/apidocs"} <= rules
