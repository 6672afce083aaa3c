import datetime as dt

import pytest
from sqlalchemy.exc import OperationalError

from app.core.security import create_access_token, decode_access_token
from app.models.personal_training import TrainingStatus

DAY = dt.date(2024, 6, 5)


@pytest.mark.asyncio
async def test_health(api) -> None:
    resp = await api.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_book_requires_token(api, trainer) -> None:
    resp = await api.post(
        "/api/v1/personal-training/book",
        json={"trainerId": trainer.id, "date": DAY.isoformat(), "time": "10:00"},
    )
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_book_rejects_bad_token(api, trainer) -> None:
    resp = await api.post(
        "/api/v1/personal-training/book",
        json={"trainerId": trainer.id, "date": DAY.isoformat(), "time": "10:00"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid or expired token"}


@pytest.mark.asyncio
async def test_book_creates_pending_booking(api, store, trainer, client_user, headers_for) -> None:
    resp = await api.post(
        "/api/v1/personal-training/book",
        json={"trainerId": trainer.id, "date": DAY.isoformat(), "time": "10:00", "message": "First session"},
        headers=headers_for(client_user),
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "PENDING"
    assert body["trainerId"] == trainer.id
    assert body["clientId"] == client_user.id
    assert body["time"] == "10:00"
    assert body["message"] == "First session"
    assert store.bookings[body["id"]].status == TrainingStatus.PENDING


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("time", "status_code"),
    [("11:35", 409), ("14:00", 409), ("14:01", 201), ("21:30", 400), ("21:00", 201)],
)
async def test_book_maps_rejections(api, store, trainer, client_user, headers_for, time, status_code) -> None:
    store.add_session(trainer, "12:00", "13:30", day=DAY)
    resp = await api.post(
        "/api/v1/personal-training/book",
        json={"trainerId": trainer.id, "date": DAY.isoformat(), "time": time},
        headers=headers_for(client_user),
    )
    assert resp.status_code == status_code
    if status_code != 201:
        assert resp.json()["detail"]


@pytest.mark.asyncio
async def test_book_unknown_trainer(api, client_user, headers_for) -> None:
    resp = await api.post(
        "/api/v1/personal-training/book",
        json={"trainerId": 999, "date": DAY.isoformat(), "time": "10:00"},
        headers=headers_for(client_user),
    )
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Trainer not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize("time", ["9:00", "24:00", "10:60", "noon"])
async def test_book_validates_time_format(api, trainer, client_user, headers_for, time) -> None:
    resp = await api.post(
        "/api/v1/personal-training/book",
        json={"trainerId": trainer.id, "date": DAY.isoformat(), "time": time},
        headers=headers_for(client_user),
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_book_store_failure_is_500(api, store, trainer, client_user, headers_for, monkeypatch) -> None:
    async def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(store, "list_group_sessions", broken)
    resp = await api.post(
        "/api/v1/personal-training/book",
        json={"trainerId": trainer.id, "date": DAY.isoformat(), "time": "10:00"},
        headers=headers_for(client_user),
    )
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to book personal training"}


@pytest.mark.asyncio
async def test_my_bookings(api, store, trainer, client_user, headers_for) -> None:
    store.add_booking(trainer, client_user, "09:00", day=DAY)
    resp = await api.get("/api/v1/personal-training/my-bookings", headers=headers_for(client_user))
    assert resp.status_code == 200
    [booking] = resp.json()
    assert booking["trainer"] == {"firstName": "Adam", "lastName": "Kowalski", "pricePerSession": 120.0}


@pytest.mark.asyncio
async def test_trainer_bookings_forbidden_for_clients(api, client_user, headers_for) -> None:
    resp = await api.get("/api/v1/personal-training/trainer-bookings", headers=headers_for(client_user))
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_trainer_confirms_booking(api, store, trainer, client_user, headers_for) -> None:
    booking = store.add_booking(trainer, client_user, "09:00", day=DAY)

    listed = await api.get("/api/v1/personal-training/trainer-bookings", headers=headers_for(trainer))
    assert listed.status_code == 200
    assert listed.json()[0]["client"]["email"] == client_user.email

    resp = await api.patch(
        f"/api/v1/personal-training/bookings/{booking.id}/status",
        json={"status": "CONFIRMED"},
        headers=headers_for(trainer),
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "CONFIRMED"

    invalid = await api.patch(
        f"/api/v1/personal-training/bookings/{booking.id}/status",
        json={"status": "DONE"},
        headers=headers_for(trainer),
    )
    assert invalid.status_code == 422


@pytest.mark.asyncio
async def test_group_session_registration_flow(api, store, trainer, client_user, headers_for) -> None:
    session = store.add_session(trainer, "12:00", "13:30", day=dt.date.today() + dt.timedelta(days=2))
    headers = headers_for(client_user)

    resp = await api.post(f"/api/v1/training-sessions/{session.id}/register", headers=headers)
    assert resp.status_code == 200

    again = await api.post(f"/api/v1/training-sessions/{session.id}/register", headers=headers)
    assert again.status_code == 400
    assert again.json() == {"detail": "Already registered"}

    status_resp = await api.get(f"/api/v1/training-sessions/{session.id}/registration-status", headers=headers)
    assert status_resp.json() == {"isRegistered": True}

    calendar = await api.get("/api/v1/training-sessions", headers=headers)
    assert calendar.status_code == 200
    [entry] = calendar.json()
    assert entry["isUserRegistered"] is True
    assert entry["currentParticipants"] == 1

    participants = await api.get(f"/api/v1/training-sessions/{session.id}/participants", headers=headers_for(trainer))
    assert participants.status_code == 200
    body = participants.json()
    assert body["sessionDetails"]["maxParticipants"] == 10
    assert [p["id"] for p in body["participants"]] == [client_user.id]

    removed = await api.delete(
        f"/api/v1/training-sessions/{session.id}/participants/{client_user.id}", headers=headers_for(trainer)
    )
    assert removed.status_code == 200
    assert (session.id, client_user.id) not in store.participants


@pytest.mark.asyncio
async def test_trainer_availability(api, store, trainer, client_user, headers_for) -> None:
    store.add_booking(trainer, client_user, "09:00", day=DAY)
    resp = await api.get(
        f"/api/v1/trainers/{trainer.id}/availability/{DAY.isoformat()}", headers=headers_for(client_user)
    )
    assert resp.status_code == 200
    times = resp.json()["availableTimes"]
    assert "09:00" not in times
    assert "10:00" not in times
    assert "21:00" in times
    assert "22:00" not in times


@pytest.mark.asyncio
async def test_trainer_creates_recurring_sessions(api, store, trainer, client_user, headers_for) -> None:
    start = dt.date.today() + dt.timedelta(days=3)
    payload = {
        "title": "Strength Training",
        "date": start.isoformat(),
        "startTime": "07:00",
        "endTime": "08:30",
        "maxParticipants": 15,
        "isRecurring": True,
    }
    resp = await api.post("/api/v1/trainers/sessions", json=payload, headers=headers_for(trainer))
    assert resp.status_code == 201
    assert len(resp.json()) == 8

    denied = await api.post("/api/v1/trainers/sessions", json=payload, headers=headers_for(client_user))
    assert denied.status_code == 403

    backwards = dict(payload, startTime="09:00", endTime="08:00")
    invalid = await api.post("/api/v1/trainers/sessions", json=backwards, headers=headers_for(trainer))
    assert invalid.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/v1/trainers", "/api/v1/trainers/1/availability/2024-06-05"])
async def test_trainer_routes_require_token(api, trainer, path) -> None:
    resp = await api.get(path)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_list_trainers(api, trainer, client_user, headers_for) -> None:
    resp = await api.get("/api/v1/trainers", headers=headers_for(client_user))
    assert resp.status_code == 200
    assert [t["firstName"] for t in resp.json()] == ["Adam"]


@pytest.mark.asyncio
async def test_register_store_failure_is_500(api, store, trainer, client_user, headers_for, monkeypatch) -> None:
    session = store.add_session(trainer, "12:00", "13:30")

    async def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(store, "get_training_session", broken)
    resp = await api.post(f"/api/v1/training-sessions/{session.id}/register", headers=headers_for(client_user))
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to register for session"}


def test_token_carries_identity_claims() -> None:
    payload = decode_access_token(create_access_token(7, "coach@gym.test", "TRAINER"))
    assert payload["sub"] == "7"
    assert payload["email"] == "coach@gym.test"
    assert payload["role"] == "TRAINER"
