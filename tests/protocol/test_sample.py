from __future__ import annotations

from fastapi.testclient import TestClient

from chesslib.protocol.http.app import create_app


def _client_and_game() -> tuple[TestClient, str]:
    client = TestClient(create_app())
    return client, client.post("/api/games").json()["game_id"]


def test_sample_with_seed_is_reproducible() -> None:
    client, game_id = _client_and_game()
    url = f"/api/games/{game_id}/sample"
    a = client.post(url, json={"count": 3, "seed": 99}).json()["moves"]
    b = client.post(url, json={"count": 3, "seed": 99}).json()["moves"]
    assert a == b
    assert len(a) == 3
    assert len(set(a)) == 3


def test_sample_all_and_none() -> None:
    client, game_id = _client_and_game()
    url = f"/api/games/{game_id}/sample"
    state = client.get(f"/api/games/{game_id}/state").json()
    assert client.post(url, json={"count": -1}).json()["moves"] == state["moves"]
    assert client.post(url, json={"count": 0}).json()["moves"] == []


def test_sample_defaults_to_one_move() -> None:
    client, game_id = _client_and_game()
    r = client.post(f"/api/games/{game_id}/sample", json={})
    assert r.status_code == 200
    body = r.json()
    assert body["game_id"] == game_id
    assert len(body["moves"]) == 1


def test_sample_uses_game_seed() -> None:
    client = TestClient(create_app())
    first = client.post("/api/games", json={"seed": 4}).json()["game_id"]
    second = client.post("/api/games", json={"seed": 4}).json()["game_id"]
    a = client.post(f"/api/games/{first}/sample", json={"count": 5}).json()["moves"]
    b = client.post(f"/api/games/{second}/sample", json={"count": 5}).json()["moves"]
    assert a == b


def test_sample_rejects_count_below_minus_one() -> None:
    client, game_id = _client_and_game()
    r = client.post(f"/api/games/{game_id}/sample", json={"count": -2})
    assert r.status_code == 422
