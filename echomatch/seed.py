"""Seed utilities for creating the NYC demo data.

`build_scenario` turns the static tables in `echomatch.demo_data` into a
`SeedPlan`: the full list of document writes for one scenario, grouped in
dependency order (users and questions, then rooms, then game sessions, then
room participants). `run_plan` applies a plan through the idempotent
upserter, so running it again only skips what is already there.

The builder is pure apart from the `now` it is handed; every timestamp in a
run is `now` or a fixed offset from it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from echomatch import demo_data
from echomatch.config import DEMO_KEYS, DemoKeys
from echomatch.schemas import (
    GameSessionDocument,
    GameState,
    ParticipantStatus,
    QuestionDocument,
    RoomDocument,
    RoomParticipantDocument,
    UserDocument,
)
from echomatch.store import DocumentStore
from echomatch.upsert import UpsertOutcome, WriteMode, upsert

logger = logging.getLogger(__name__)

USERS = "users"
QUESTIONS = "questions"
ROOMS = "rooms"
GAME_SESSIONS = "gameSessions"
ROOM_PARTICIPANTS = "roomParticipants"

# Referenced collections come before the collections that reference them
COLLECTION_ORDER: Tuple[str, ...] = (USERS, QUESTIONS, ROOMS, GAME_SESSIONS, ROOM_PARTICIPANTS)


class Scenario(str, Enum):
    WAITING = "waiting"
    LIVE = "live"
    ALL = "all"


def isoformat(value: datetime) -> str:
    """Render a timestamp as UTC ISO-8601 with milliseconds and a `Z` suffix."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def participant_id(room_id: str, user_id: str) -> str:
    return f"{room_id}:{user_id}"


@dataclass(frozen=True)
class SeedWrite:
    collection: str
    doc_id: str
    payload: Mapping[str, Any]
    mode: WriteMode = WriteMode.CREATE_IF_ABSENT

    @property
    def path(self) -> str:
        return f"{self.collection}/{self.doc_id}"


@dataclass(frozen=True)
class SeedPlan:
    scenario: Scenario
    writes: Tuple[SeedWrite, ...]

    def for_collection(self, collection: str) -> List[SeedWrite]:
        return [w for w in self.writes if w.collection == collection]

    def __len__(self) -> int:
        return len(self.writes)


@dataclass
class SeedReport:
    """Per-collection tally of what a seed run did."""

    counts: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def record(self, collection: str, outcome: UpsertOutcome) -> None:
        tally = self.counts.setdefault(collection, {o.value: 0 for o in UpsertOutcome})
        tally[outcome.value] += 1

    def total(self, outcome: UpsertOutcome) -> int:
        return sum(c.get(outcome.value, 0) for c in self.counts.values())

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        return {name: dict(tally) for name, tally in self.counts.items()}


# ----------------------------- Builders ---------------------------------
def _user_documents(now: datetime, keys: DemoKeys) -> List[UserDocument]:
    stamp = isoformat(now)
    return [
        UserDocument(
            id=keys.key(u.id),
            email=u.email,
            username=u.username,
            avatar_url=None,
            city=u.city,
            bio=u.bio,
            gender=u.gender,
            created_at=stamp,
            updated_at=stamp,
        )
        for u in demo_data.USERS
    ]


def _question_documents(now: datetime, keys: DemoKeys) -> List[QuestionDocument]:
    stamp = isoformat(now)
    return [
        QuestionDocument(
            id=keys.key(q.id),
            question_text=q.text,
            options=list(q.options),
            category=q.category,
            difficulty=demo_data.QUESTION_DIFFICULTY,
            time_limit_seconds=demo_data.QUESTION_TIME_LIMIT_SECONDS,
            created_at=stamp,
        )
        for q in demo_data.QUESTIONS
    ]


def _room_document(room_id: str, template: demo_data.RoomTemplate, now: datetime, keys: DemoKeys) -> RoomDocument:
    stamp = isoformat(now)
    actual_start = None
    if template.actual_start_offset is not None:
        actual_start = isoformat(now + template.actual_start_offset)
    return RoomDocument(
        id=room_id,
        host_id=keys.key(keys.host_user_id),
        city=template.city,
        title=template.title,
        description=template.description,
        max_participants=template.max_participants,
        status=template.status,
        entry_fee=template.entry_fee,
        scheduled_start=isoformat(now + template.scheduled_start_offset),
        actual_start=actual_start,
        actual_end=None,
        scheduled_end=None,
        created_at=stamp,
        updated_at=stamp,
        current_participants=len(demo_data.USERS),
        question_ids=[keys.key(q) for q in demo_data.ROOM_QUESTION_IDS],
        venue_address=None,
        requires_gender_parity=template.requires_gender_parity,
    )


def _session_document(room: RoomDocument, now: datetime, keys: DemoKeys) -> GameSessionDocument:
    stamp = isoformat(now)
    return GameSessionDocument(
        id=keys.key(keys.live_session_id),
        room_id=room.id,
        current_question_index=0,
        question_ids=list(room.question_ids),
        game_state=GameState.QUESTION,
        question_start_time=stamp,
        question_end_time=isoformat(now + demo_data.SESSION_QUESTION_DURATION),
        created_at=stamp,
        updated_at=stamp,
        is_test=False,
    )


def _participant_documents(room_ids: Iterable[str], now: datetime, keys: DemoKeys) -> List[RoomParticipantDocument]:
    stamp = isoformat(now)
    docs = []
    for room_id in room_ids:
        for u in demo_data.USERS:
            user_id = keys.key(u.id)
            docs.append(
                RoomParticipantDocument(
                    id=participant_id(room_id, user_id),
                    room_id=room_id,
                    user_id=user_id,
                    status=ParticipantStatus.PAID,
                    requested_at=isoformat(now + demo_data.PARTICIPANT_REQUESTED_OFFSET),
                    approved_at=isoformat(now + demo_data.PARTICIPANT_APPROVED_OFFSET),
                    paid_at=isoformat(now + demo_data.PARTICIPANT_PAID_OFFSET),
                    payment_reference=demo_data.PARTICIPANT_PAYMENT_REFERENCE,
                    score=0,
                    created_at=stamp,
                    updated_at=stamp,
                )
            )
    return docs


def build_scenario(scenario: Scenario = Scenario.ALL, now: Optional[datetime] = None, keys: DemoKeys = DEMO_KEYS) -> SeedPlan:
    """Build the ordered writes for `scenario`.

    `now` is captured once when not supplied and shared by every record in
    the plan.
    """
    now = now or datetime.now(timezone.utc)
    scenario = Scenario(scenario)

    groups: Dict[str, List[Any]] = {name: [] for name in COLLECTION_ORDER}
    groups[USERS].extend(_user_documents(now, keys))
    groups[QUESTIONS].extend(_question_documents(now, keys))

    if scenario in (Scenario.WAITING, Scenario.ALL):
        groups[ROOMS].append(_room_document(keys.key(keys.waiting_room_id), demo_data.WAITING_ROOM, now, keys))
    if scenario in (Scenario.LIVE, Scenario.ALL):
        live_room = _room_document(keys.key(keys.live_room_id), demo_data.LIVE_ROOM, now, keys)
        groups[ROOMS].append(live_room)
        groups[GAME_SESSIONS].append(_session_document(live_room, now, keys))

    groups[ROOM_PARTICIPANTS].extend(_participant_documents([r.id for r in groups[ROOMS]], now, keys))

    writes = tuple(
        SeedWrite(collection=name, doc_id=doc.id, payload=doc.to_document())
        for name in COLLECTION_ORDER
        for doc in groups[name]
    )
    plan = SeedPlan(scenario=scenario, writes=writes)
    check_references(plan)
    return plan


def build_user_profile(uid: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Profile document the single-user endpoint merge-writes at `users/{uid}`."""
    now = now or datetime.now(timezone.utc)
    stamp = isoformat(now)
    profile = demo_data.SEED_USER_PROFILE
    return UserDocument(
        id=uid,
        email=profile.email,
        username=profile.username,
        city=profile.city,
        gender=profile.gender,
        avatar_url=None,
        bio=profile.bio,
        created_at=stamp,
        updated_at=stamp,
    ).to_document()


def check_references(plan: SeedPlan) -> None:
    """Raise ValueError if any write references a document not written before it.

    Also rejects duplicate keys, sessions for rooms that are not in progress,
    and more than one session per room.
    """
    seen: Dict[str, Dict[str, Mapping[str, Any]]] = {name: {} for name in COLLECTION_ORDER}
    sessions_per_room: Dict[str, int] = {}

    def require(collection: str, doc_id: str, by: SeedWrite) -> Mapping[str, Any]:
        if doc_id not in seen[collection]:
            raise ValueError(f"{by.path} references missing {collection}/{doc_id}")
        return seen[collection][doc_id]

    for write in plan.writes:
        if write.collection not in seen:
            raise ValueError(f"Unknown collection {write.collection!r}")
        if write.doc_id in seen[write.collection]:
            raise ValueError(f"Duplicate write for {write.path}")

        payload = write.payload
        if write.collection == ROOMS:
            require(USERS, payload["hostId"], write)
            for qid in payload["questionIds"]:
                require(QUESTIONS, qid, write)
        elif write.collection == GAME_SESSIONS:
            room = require(ROOMS, payload["roomId"], write)
            if room["status"] != "inProgress":
                raise ValueError(f"{write.path} attached to room {payload['roomId']} in status {room['status']}")
            sessions_per_room[payload["roomId"]] = sessions_per_room.get(payload["roomId"], 0) + 1
            if sessions_per_room[payload["roomId"]] > 1:
                raise ValueError(f"More than one session for room {payload['roomId']}")
        elif write.collection == ROOM_PARTICIPANTS:
            require(ROOMS, payload["roomId"], write)
            require(USERS, payload["userId"], write)

        seen[write.collection][write.doc_id] = payload


# ----------------------------- Runner ---------------------------------
def run_plan(store: DocumentStore, plan: SeedPlan) -> SeedReport:
    """Apply every write of `plan` in order. Stops at the first store error."""
    report = SeedReport()
    for write in plan.writes:
        outcome = upsert(store, write.collection, write.doc_id, write.payload, mode=write.mode)
        report.record(write.collection, outcome)

    for name, tally in report.counts.items():
        logger.info("Seeded %s: %s", name, tally)
    return report


def seed_demo(store: DocumentStore, scenario: Scenario = Scenario.ALL, now: Optional[datetime] = None, keys: DemoKeys = DEMO_KEYS) -> SeedReport:
    """Build and apply a demo scenario. Safe to call repeatedly."""
    plan = build_scenario(scenario, now=now, keys=keys)
    logger.info("Seeding scenario=%s (%d writes)", plan.scenario.value, len(plan))
    return run_plan(store, plan)


def seed_user_profile(store: DocumentStore, uid: str, now: Optional[datetime] = None) -> Tuple[str, Dict[str, Any]]:
    """Merge-write the fixed profile for `uid`; returns (path, data)."""
    ref = store.document(USERS, uid)
    data = build_user_profile(uid, now=now)
    outcome = upsert(store, ref.collection, ref.doc_id, data, mode=WriteMode.MERGE)
    logger.info("Seed user profile %s: %s", ref.path, outcome.value)
    return ref.path, data


__all__ = [
    "USERS",
    "QUESTIONS",
    "ROOMS",
    "GAME_SESSIONS",
    "ROOM_PARTICIPANTS",
    "COLLECTION_ORDER",
    "Scenario",
    "SeedWrite",
    "SeedPlan",
    "SeedReport",
    "isoformat",
    "participant_id",
    "build_scenario",
    "build_user_profile",
    "check_references",
    "run_plan",
    "seed_demo",
    "seed_user_profile",
]
