from datetime import datetime, timedelta, timezone

import pytest

from echomatch.config import DemoKeys
from echomatch.seed import (
    COLLECTION_ORDER,
    GAME_SESSIONS,
    QUESTIONS,
    ROOM_PARTICIPANTS,
    ROOMS,
    USERS,
    Scenario,
    SeedPlan,
    SeedWrite,
    build_scenario,
    build_user_profile,
    check_references,
    isoformat,
)

NOW = datetime(2025, 3, 14, 18, 30, 0, tzinfo=timezone.utc)


def _ts(delta=timedelta()):
    return isoformat(NOW + delta)


def test_isoformat_matches_client_timestamp_shape():
    assert isoformat(NOW) == "2025-03-14T18:30:00.000Z"
    local = datetime(2025, 3, 14, 14, 30, 0, tzinfo=timezone(timedelta(hours=-4)))
    assert isoformat(local) == "2025-03-14T18:30:00.000Z"


def test_full_plan_shape():
    plan = build_scenario(Scenario.ALL, now=NOW)

    assert len(plan.for_collection(USERS)) == 6
    assert len(plan.for_collection(QUESTIONS)) == 8
    assert len(plan.for_collection(ROOMS)) == 2
    assert len(plan.for_collection(GAME_SESSIONS)) == 1
    assert len(plan.for_collection(ROOM_PARTICIPANTS)) == 12
    assert len(plan) == 29


def test_writes_are_grouped_in_dependency_order():
    plan = build_scenario(Scenario.ALL, now=NOW)
    positions = [COLLECTION_ORDER.index(w.collection) for w in plan.writes]
    assert positions == sorted(positions)


def test_rooms_reference_existing_questions_and_host():
    plan = build_scenario(Scenario.ALL, now=NOW)
    user_ids = {w.doc_id for w in plan.for_collection(USERS)}
    question_ids = {w.doc_id for w in plan.for_collection(QUESTIONS)}

    for room in plan.for_collection(ROOMS):
        assert room.payload["hostId"] in user_ids
        assert room.payload["questionIds"] == ["q1", "q2", "q3", "q4", "q5"]
        assert set(room.payload["questionIds"]) <= question_ids


def test_waiting_room_document():
    plan = build_scenario(Scenario.WAITING, now=NOW)
    (room,) = plan.for_collection(ROOMS)

    assert room.doc_id == "nyc_mixer_1"
    assert room.payload == {
        "id": "nyc_mixer_1",
        "hostId": "u_nyc_lena",
        "city": "New York, New York, United States",
        "title": "NYC EchoMatch Mixer",
        "description": "A quick-fire mini game to find great vibes near you.",
        "maxParticipants": 10,
        "status": "waiting",
        "entryFee": 0.0,
        "scheduledStart": _ts(timedelta(hours=1)),
        "actualStart": None,
        "actualEnd": None,
        "scheduledEnd": None,
        "createdAt": _ts(),
        "updatedAt": _ts(),
        "currentParticipants": 6,
        "questionIds": ["q1", "q2", "q3", "q4", "q5"],
        "venueAddress": None,
        "requiresGenderParity": True,
    }
    assert plan.for_collection(GAME_SESSIONS) == []
    assert len(plan.for_collection(ROOM_PARTICIPANTS)) == 6


def test_live_room_and_session():
    plan = build_scenario(Scenario.LIVE, now=NOW)
    (room,) = plan.for_collection(ROOMS)
    (session,) = plan.for_collection(GAME_SESSIONS)

    assert room.payload["status"] == "inProgress"
    assert room.payload["scheduledStart"] == _ts(timedelta(minutes=-15))
    assert room.payload["actualStart"] == _ts(timedelta(minutes=-10))

    assert session.doc_id == "gs_nyc_live"
    assert session.payload["roomId"] == "nyc_mixer_live"
    assert session.payload["gameState"] == "question"
    assert session.payload["currentQuestionIndex"] == 0
    assert session.payload["questionIds"] == room.payload["questionIds"]
    assert session.payload["questionStartTime"] == _ts()
    assert session.payload["questionEndTime"] == _ts(timedelta(seconds=30))
    assert session.payload["isTest"] is False


def test_participants_cover_every_user_in_every_room():
    plan = build_scenario(Scenario.ALL, now=NOW)
    users = [w.doc_id for w in plan.for_collection(USERS)]
    rooms = [w.doc_id for w in plan.for_collection(ROOMS)]

    ids = {w.doc_id for w in plan.for_collection(ROOM_PARTICIPANTS)}
    assert ids == {f"{r}:{u}" for r in rooms for u in users}

    for w in plan.for_collection(ROOM_PARTICIPANTS):
        p = w.payload
        assert p["status"] == "paid"
        assert p["paymentReference"] == "demo"
        assert p["score"] == 0
        assert p["requestedAt"] == _ts(timedelta(minutes=-30))
        assert p["approvedAt"] == _ts(timedelta(minutes=-25))
        assert p["paidAt"] == _ts(timedelta(minutes=-20))


def test_user_and_question_defaults():
    plan = build_scenario(Scenario.ALL, now=NOW)
    amy = plan.for_collection(USERS)[0].payload
    assert amy["id"] == "u_brooklyn_amy"
    assert amy["avatarUrl"] is None
    assert amy["isActive"] is True
    assert amy["totalGamesPlayed"] == 0
    assert amy["totalMatches"] == 0
    assert amy["createdAt"] == amy["updatedAt"] == _ts()

    q = plan.for_collection(QUESTIONS)[1].payload
    assert q["questionText"] == "Pick a New York snack:"
    assert q["options"] == ["Bagel + schmear", "Dollar slice", "Halal cart", "Ramen"]
    assert q["difficulty"] == "medium"
    assert q["timeLimitSeconds"] == 30


def test_builder_is_deterministic_for_a_given_now():
    assert build_scenario(Scenario.ALL, now=NOW) == build_scenario(Scenario.ALL, now=NOW)


def test_namespace_prefixes_every_key_and_reference():
    plan = build_scenario(Scenario.ALL, now=NOW, keys=DemoKeys(namespace="t1_"))

    assert all(w.doc_id.startswith("t1_") for w in plan.writes)
    (session,) = plan.for_collection(GAME_SESSIONS)
    assert session.payload["roomId"] == "t1_nyc_mixer_live"
    live = [w for w in plan.for_collection(ROOMS) if w.doc_id == "t1_nyc_mixer_live"][0]
    assert live.payload["hostId"] == "t1_u_nyc_lena"
    assert live.payload["questionIds"][0] == "t1_q1"
    assert "t1_nyc_mixer_1:t1_u_queens_jay" in {w.doc_id for w in plan.for_collection(ROOM_PARTICIPANTS)}


def test_check_references_rejects_dangling_question():
    room = SeedWrite(ROOMS, "r1", {"id": "r1", "hostId": "u1", "questionIds": ["q-missing"], "status": "waiting"})
    user = SeedWrite(USERS, "u1", {"id": "u1"})
    with pytest.raises(ValueError, match="questions/q-missing"):
        check_references(SeedPlan(Scenario.WAITING, (user, room)))


def test_check_references_rejects_out_of_order_participant():
    participant = SeedWrite(ROOM_PARTICIPANTS, "r1:u1", {"roomId": "r1", "userId": "u1"})
    user = SeedWrite(USERS, "u1", {"id": "u1"})
    room = SeedWrite(ROOMS, "r1", {"id": "r1", "hostId": "u1", "questionIds": [], "status": "waiting"})
    with pytest.raises(ValueError, match="rooms/r1"):
        check_references(SeedPlan(Scenario.WAITING, (user, participant, room)))


def test_check_references_rejects_session_for_waiting_room():
    user = SeedWrite(USERS, "u1", {"id": "u1"})
    room = SeedWrite(ROOMS, "r1", {"id": "r1", "hostId": "u1", "questionIds": [], "status": "waiting"})
    session = SeedWrite(GAME_SESSIONS, "s1", {"roomId": "r1"})
    with pytest.raises(ValueError, match="status waiting"):
        check_references(SeedPlan(Scenario.LIVE, (user, room, session)))


def test_check_references_rejects_second_session_for_room():
    user = SeedWrite(USERS, "u1", {"id": "u1"})
    room = SeedWrite(ROOMS, "r1", {"id": "r1", "hostId": "u1", "questionIds": [], "status": "inProgress"})
    s1 = SeedWrite(GAME_SESSIONS, "s1", {"roomId": "r1"})
    s2 = SeedWrite(GAME_SESSIONS, "s2", {"roomId": "r1"})
    with pytest.raises(ValueError, match="More than one session"):
        check_references(SeedPlan(Scenario.LIVE, (user, room, s1, s2)))


def test_check_references_rejects_duplicate_keys():
    user = SeedWrite(USERS, "u1", {"id": "u1"})
    with pytest.raises(ValueError, match="Duplicate"):
        check_references(SeedPlan(Scenario.WAITING, (user, user)))


def test_user_profile_payload():
    data = build_user_profile("uid-123", now=NOW)
    assert data == {
        "id": "uid-123",
        "email": "seed@demo.local",
        "username": "citygirl",
        "avatarUrl": None,
        "city": "New York",
        "bio": None,
        "gender": "female",
        "createdAt": _ts(),
        "updatedAt": _ts(),
        "isActive": True,
        "totalGamesPlayed": 0,
        "totalMatches": 0,
    }
