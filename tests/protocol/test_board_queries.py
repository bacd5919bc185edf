from __future__ import annotations

from fastapi.testclient import TestClient

from mailbox_chess.protocol.http.app import create_app


def _client_and_game() -> tuple[TestClient, str]:
    client = TestClient(create_app())
    return client, client.post("/api/games").json()["game_id"]


def test_pieces_query() -> None:
    client, game_id = _client_and_game()
    r = client.get(f"/api/games/{game_id}/pieces", params={"color": "white", "type": "rook"})
    assert r.status_code == 200
    assert r.json() == [
        {"rank": 0, "file": 0, "square": "a1"},
        {"rank": 0, "file": 7, "square": "h1"},
    ]

    r = client.get(f"/api/games/{game_id}/pieces", params={"color": "black", "type": "pawn"})
    assert len(r.json()) == 8


def test_pieces_query_rejects_unknown_type() -> None:
    client, game_id = _client_and_game()
    r = client.get(f"/api/games/{game_id}/pieces", params={"color": "white", "type": "wizard"})
    assert r.status_code == 422


def test_moves_query_in_index_space() -> None:
    client, game_id = _client_and_game()
    r = client.get(f"/api/games/{game_id}/moves/e2")
    assert r.status_code == 200
    body = r.json()
    assert body["index"] == 35
    assert body["quiet"] == [55, 45]
    assert body["quiet_squares"] == ["e4", "e3"]
    assert body["captures"] == []


def test_moves_query_empty_and_bad_square() -> None:
    client, game_id = _client_and_game()
    r = client.get(f"/api/games/{game_id}/moves/e4")
    assert r.status_code == 200
    assert r.json()["quiet"] == []

    r = client.get(f"/api/games/{game_id}/moves/k9")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "out_of_bounds_square"
