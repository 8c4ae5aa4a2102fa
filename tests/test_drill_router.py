from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from postrainer.core.models import PosToSeatQuestion, SeatIpQuestion, SeatToPosQuestion
from postrainer.features.drill import DrillManager
from postrainer.web.app import create_app


@pytest.fixture
def manager() -> DrillManager:
    return DrillManager()


@pytest.fixture
def client(manager: DrillManager) -> TestClient:
    return TestClient(create_app(manager))


def _create(client: TestClient, **body: object) -> str:
    res = client.post("/api/v1/drill", json={"seed": 42, **body})
    assert res.status_code == 200
    return res.json()["session"]


def _question(manager: DrillManager, sid: str):
    return manager._sessions[sid].controller.round.question


def test_healthz(client: TestClient) -> None:
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_create_and_fetch_round(client: TestClient) -> None:
    sid = _create(client, players=8, mode="seatToPos", naming="A")

    res = client.get(f"/api/v1/drill/{sid}/round")

    assert res.status_code == 200
    data = res.json()
    assert data["round_no"] == 1
    assert data["config"] == {"players": 8, "timer": 10.0, "naming": "A", "mode": "seatToPos"}
    assert len(data["active_seats"]) == 8
    assert len(data["seat_flags"]) == 10
    assert len(data["labels"]) == 10
    assert data["question"]["type"] == "seatToPos"
    assert data["question"]["prompt"] == "Position?"
    assert "correct_label" not in data["question"]
    assert data["labels"][data["button_seat"]] == "BTN"


def test_create_clamps_and_accepts_form_strings(client: TestClient) -> None:
    sid = _create(client, players="15", timer="0.1", mode="bogus")
    config = client.get(f"/api/v1/drill/{sid}/round").json()["config"]
    assert config["players"] == 10
    assert config["timer"] == 0.5
    assert config["mode"] == "posToSeat"


def test_correct_seat_answer_advances(client: TestClient, manager: DrillManager) -> None:
    sid = _create(client)
    question = _question(manager, sid)
    assert isinstance(question, PosToSeatQuestion)

    res = client.post(f"/api/v1/drill/{sid}/answer", json={"seat": question.target_seat})

    assert res.status_code == 200
    data = res.json()
    assert data["accepted"] is True
    assert data["correct"] is True
    assert data["advanced"] is True
    assert data["round"]["round_no"] == 2


def test_wrong_seat_answer_flashes(client: TestClient, manager: DrillManager) -> None:
    sid = _create(client)
    question = _question(manager, sid)
    seats = manager._sessions[sid].controller.round.active_seats
    wrong = next(seat for seat in seats if seat != question.target_seat)

    data = client.post(f"/api/v1/drill/{sid}/answer", json={"seat": wrong}).json()

    assert data["correct"] is False
    assert data["advanced"] is False
    assert data["round"]["error_flash"] is True
    assert data["round"]["round_no"] == 1


def test_label_answer_is_case_insensitive(client: TestClient, manager: DrillManager) -> None:
    sid = _create(client, mode="seatToPos")
    question = _question(manager, sid)
    assert isinstance(question, SeatToPosQuestion)

    data = client.post(f"/api/v1/drill/{sid}/answer", json={"label": question.correct_label.lower()}).json()

    assert data["advanced"] is True


def test_ip_answer(client: TestClient, manager: DrillManager) -> None:
    sid = _create(client, mode="seatIp")
    question = _question(manager, sid)
    assert isinstance(question, SeatIpQuestion)

    data = client.post(f"/api/v1/drill/{sid}/answer", json={"ip": question.is_ip}).json()

    assert data["advanced"] is True


@pytest.mark.parametrize("body", [{}, {"seat": 1, "ip": True}, {"seat": 10}, {"seat": -1}])
def test_answer_validation(client: TestClient, body: dict[str, object]) -> None:
    sid = _create(client)
    res = client.post(f"/api/v1/drill/{sid}/answer", json=body)
    assert res.status_code == 422


def test_tick_drives_timeout(client: TestClient) -> None:
    sid = _create(client, timer=1)

    data = client.post(f"/api/v1/drill/{sid}/tick", json={"elapsed": 0.5}).json()
    assert data["time_remaining_fraction"] == 0.5

    data = client.post(f"/api/v1/drill/{sid}/tick", json={"elapsed": 0.5}).json()
    assert data["phase"] == "transitioning"
    assert "question" not in data

    data = client.post(f"/api/v1/drill/{sid}/tick", json={"elapsed": 0.6}).json()
    assert data["phase"] == "idle"
    assert data["round_no"] == 2
    assert data["last_advance_reason"] == "timeout"


def test_negative_tick_rejected(client: TestClient) -> None:
    sid = _create(client)
    res = client.post(f"/api/v1/drill/{sid}/tick", json={"elapsed": -1})
    assert res.status_code == 422


def test_config_update(client: TestClient) -> None:
    sid = _create(client)

    data = client.post(f"/api/v1/drill/{sid}/config", json={"players": 1, "naming": "Z"}).json()

    assert data["config"]["players"] == 2
    assert data["config"]["naming"] == "B"
    assert data["round_no"] == 2
    assert data["last_advance_reason"] == "configured"
    assert sorted(data["labels"][seat] for seat in data["active_seats"]) == ["BB", "SB"]


def test_timer_only_config_keeps_round(client: TestClient) -> None:
    sid = _create(client)
    client.post(f"/api/v1/drill/{sid}/tick", json={"elapsed": 2})

    data = client.post(f"/api/v1/drill/{sid}/config", json={"timer": "20"}).json()

    assert data["round_no"] == 1
    assert data["time_left"] == 20.0


def test_unknown_session_is_404(client: TestClient) -> None:
    assert client.get("/api/v1/drill/nope/round").status_code == 404
    assert client.post("/api/v1/drill/nope/tick", json={"elapsed": 0.1}).status_code == 404
    assert client.post("/api/v1/drill/nope/answer", json={"seat": 1}).status_code == 404
    assert client.post("/api/v1/drill/nope/config", json={}).status_code == 404


def test_delete_session(client: TestClient) -> None:
    sid = _create(client)
    assert client.delete(f"/api/v1/drill/{sid}").status_code == 204
    assert client.delete(f"/api/v1/drill/{sid}").status_code == 404
    assert client.get(f"/api/v1/drill/{sid}/round").status_code == 404
