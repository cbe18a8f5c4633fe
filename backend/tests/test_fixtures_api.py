"""
API tests: fixture generation, replacement gate and custom upload.
"""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from fixturedesk.services.document_store import save_document
from tests.conftest import make_players, make_tournament


@pytest.fixture
def tournament_id(session: Session) -> str:
    players = make_players(11) + make_players(7, category="40+", prefix="v")
    tournament = make_tournament(players)
    return save_document(session, tournament)


def _generate(client: TestClient, tid: str, **body):
    payload = {"category": "Open", "event_type": "Men Singles"}
    payload.update(body)
    return client.post(f"/api/tournaments/{tid}/fixtures/generate", json=payload)


def test_generate_fixtures(client: TestClient, tournament_id: str):
    resp = _generate(client, tournament_id)
    assert resp.status_code == 201
    fixture = resp.json()
    assert fixture["category"] == "Open"
    assert fixture["type"] == "Men Singles"
    assert [len(g["playerIds"]) for g in fixture["groups"]] == [6, 5]
    assert [len(g["matches"]) for g in fixture["groups"]] == [15, 10]
    assert [g["name"] for g in fixture["groups"]] == ["Group A", "Group B"]

    listed = client.get(f"/api/tournaments/{tournament_id}/fixtures").json()
    assert listed == [fixture]


def test_regenerate_requires_confirmation(client: TestClient, tournament_id: str):
    first = _generate(client, tournament_id).json()

    resp = _generate(client, tournament_id)
    assert resp.status_code == 409
    assert client.get(f"/api/tournaments/{tournament_id}/fixtures").json() == [first]

    resp = _generate(client, tournament_id, replace_existing=True)
    assert resp.status_code == 201
    listed = client.get(f"/api/tournaments/{tournament_id}/fixtures").json()
    assert len(listed) == 1
    old_ids = {m["id"] for g in first["groups"] for m in g["matches"]}
    new_ids = {m["id"] for g in listed[0]["groups"] for m in g["matches"]}
    assert old_ids.isdisjoint(new_ids)


def test_other_event_type_is_separate_key(client: TestClient, tournament_id: str):
    assert _generate(client, tournament_id).status_code == 201
    assert _generate(client, tournament_id, event_type="Men Doubles").status_code == 201
    assert len(client.get(f"/api/tournaments/{tournament_id}/fixtures").json()) == 2


def test_generate_unpartitionable_count(client: TestClient, tournament_id: str):
    resp = _generate(client, tournament_id, category="40+")
    assert resp.status_code == 422
    assert "Cannot split 7 players" in resp.json()["detail"]
    assert client.get(f"/api/tournaments/{tournament_id}/fixtures").json() == []


def test_generate_insufficient_players(client: TestClient, session: Session):
    tid = save_document(session, make_tournament(make_players(3)))
    resp = _generate(client, tid)
    assert resp.status_code == 422
    assert "minimum of 4 players" in resp.json()["detail"]


def test_generate_unknown_category_or_type(client: TestClient, tournament_id: str):
    assert _generate(client, tournament_id, category="Juniors").status_code == 422
    assert _generate(client, tournament_id, event_type="Quads").status_code == 422


def test_upload_custom_fixtures(client: TestClient, tournament_id: str):
    _generate(client, tournament_id)
    custom = [
        {
            "category": "Open",
            "type": "Men Singles",
            "format": "RoundRobin",
            "groups": [
                {
                    "id": "group-custom",
                    "name": "Final Four",
                    "playerIds": ["p1", "p2", "p3", "p4"],
                    "matches": [{"id": "match-custom", "player1Id": "p1", "player2Id": "p2", "status": "Scheduled"}],
                }
            ],
        }
    ]
    resp = client.put(f"/api/tournaments/{tournament_id}/fixtures", json=custom)
    assert resp.status_code == 200

    listed = client.get(f"/api/tournaments/{tournament_id}/fixtures").json()
    assert len(listed) == 1
    assert listed[0]["groups"][0]["name"] == "Final Four"
    assert listed[0]["groups"][0]["matches"][0]["history"] == []


def test_upload_rejects_malformed_fixtures(client: TestClient, tournament_id: str):
    resp = client.put(f"/api/tournaments/{tournament_id}/fixtures", json=[{"category": "Open"}])
    assert resp.status_code == 422


def _custom_fixture(player1_id: str, player2_id: str, event_type: str = "Men Singles") -> dict:
    return {
        "category": "Open",
        "type": event_type,
        "groups": [
            {
                "name": "Final Four",
                "playerIds": ["p1", "p2", "p3", "p4"],
                "matches": [{"player1Id": player1_id, "player2Id": player2_id}],
            }
        ],
    }


@pytest.mark.parametrize(
    "fixtures",
    [
        [_custom_fixture("p1", "p2"), _custom_fixture("p3", "p4")],
        [_custom_fixture("p1", "p1")],
        [_custom_fixture("p1", "v1")],
    ],
    ids=["duplicate-key", "same-player", "outside-group"],
)
def test_upload_rejects_invalid_fixtures(client: TestClient, tournament_id: str, fixtures):
    _generate(client, tournament_id)
    before = client.get(f"/api/tournaments/{tournament_id}/fixtures").json()

    resp = client.put(f"/api/tournaments/{tournament_id}/fixtures", json=fixtures)

    assert resp.status_code == 422
    assert client.get(f"/api/tournaments/{tournament_id}/fixtures").json() == before
