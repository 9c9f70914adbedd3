from __future__ import annotations

from fastapi.testclient import TestClient

from chesslib.engine.board import STARTPOS_FEN
from chesslib.protocol.http.app import create_app


def _client() -> TestClient:
    return TestClient(create_app())


def _new_game(client: TestClient, **body: object) -> str:
    r = client.post("/api/games", json=body or None)
    assert r.status_code == 200
    return r.json()["game_id"]


def test_create_game_and_get_state() -> None:
    client = _client()
    r = client.post("/api/games")
    assert r.status_code == 200
    body = r.json()
    assert isinstance(body["game_id"], str) and body["game_id"]
    assert body["fen"] == STARTPOS_FEN

    r2 = client.get(f"/api/games/{body['game_id']}/state")
    assert r2.status_code == 200
    state = r2.json()
    assert state["game_id"] == body["game_id"]
    assert state["side_to_move"] == "w"
    assert len(state["moves"]) == 20
    assert state["board"][0] == "♜♞♝♛♚♝♞♜"
    assert state["last_move"] is None
    assert state["move_history"] == []


def test_create_game_from_fen() -> None:
    client = _client()
    fen = "4k3/8/8/8/8/8/8/4K3 b - - 0 1"
    r = client.post("/api/games", json={"fen": fen})
    assert r.status_code == 200
    assert r.json()["fen"] == fen

    r_bad = client.post("/api/games", json={"fen": "not a fen"})
    assert r_bad.status_code == 400
    assert r_bad.json()["error"]["message"] == "invalid FEN"


def test_get_state_unknown_id_404() -> None:
    client = _client()
    r = client.get("/api/games/does-not-exist/state")
    assert r.status_code == 404
    body = r.json()
    assert body["error"]["code"] == "not_found"


def test_set_position_validation_and_success() -> None:
    client = _client()
    game_id = _new_game(client)

    r_bad = client.post(f"/api/games/{game_id}/position", json={"fen": ""})
    assert r_bad.status_code == 400
    assert r_bad.json()["error"]["code"] == "bad_request"

    fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
    r_ok = client.post(f"/api/games/{game_id}/position", json={"fen": fen})
    assert r_ok.status_code == 200
    state = r_ok.json()
    assert state["fen"] == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - - 0 1"
    assert state["side_to_move"] == "b"


def test_make_move() -> None:
    client = _client()
    game_id = _new_game(client)
    r = client.post(f"/api/games/{game_id}/move", json={"move": "e2e4"})
    assert r.status_code == 200
    state = r.json()
    assert state["side_to_move"] == "b"
    assert state["last_move"] == "e2e4"
    assert state["move_history"] == ["e2e4"]
    assert "e7e5" in state["moves"]


def test_make_move_rejections() -> None:
    client = _client()
    game_id = _new_game(client)

    r = client.post(f"/api/games/{game_id}/move", json={"move": "e2"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "bad_request"

    r = client.post(f"/api/games/{game_id}/move", json={"move": "e2e5"})
    assert r.status_code == 400
    assert "not available" in r.json()["error"]["message"]

    r = client.post(f"/api/games/{game_id}/move", json={})
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "unprocessable_entity"

    r = client.post("/api/games/missing/move", json={"move": "e2e4"})
    assert r.status_code == 404


def test_delete_game() -> None:
    client = _client()
    game_id = _new_game(client)
    r = client.delete(f"/api/games/{game_id}")
    assert r.status_code == 200
    assert r.json() == {"deleted": True}
    assert client.get(f"/api/games/{game_id}/state").status_code == 404
    assert client.delete(f"/api/games/{game_id}").status_code == 404


def test_games_are_isolated() -> None:
    client = _client()
    a = _new_game(client)
    b = _new_game(client)
    client.post(f"/api/games/{a}/move", json={"move": "d2d4"})
    assert client.get(f"/api/games/{b}/state").json()["fen"] == STARTPOS_FEN
