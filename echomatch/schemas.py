"""Pydantic schemas for the EchoMatch seeder.

Document models describe what is stored in each collection. They use
snake_case attributes and dump with camelCase aliases, which is the shape the
client apps read. Request/response models for the HTTP API follow.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class RoomStatus(str, Enum):
    WAITING = "waiting"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"


class ParticipantStatus(str, Enum):
    REQUESTED = "requested"
    APPROVED = "approved"
    PAID = "paid"
    REJECTED = "rejected"


class GameState(str, Enum):
    QUESTION = "question"
    REVEAL = "reveal"
    FINISHED = "finished"


class Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ----------------------------- Documents ---------------------------------
class UserDocument(Document):
    id: str
    email: str
    username: str
    avatar_url: Optional[str] = None
    city: str
    bio: Optional[str] = None
    gender: str
    created_at: str
    updated_at: str
    is_active: bool = True
    total_games_played: int = 0
    total_matches: int = 0


class QuestionDocument(Document):
    id: str
    question_text: str
    options: List[str]
    category: str
    difficulty: str = "medium"
    time_limit_seconds: int = 30
    created_at: str


class RoomDocument(Document):
    id: str
    host_id: str
    city: str
    title: str
    description: str
    max_participants: int
    status: RoomStatus
    entry_fee: float = 0.0
    scheduled_start: Optional[str] = None
    actual_start: Optional[str] = None
    actual_end: Optional[str] = None
    scheduled_end: Optional[str] = None
    created_at: str
    updated_at: str
    current_participants: int = 0
    question_ids: List[str] = Field(default_factory=list)
    venue_address: Optional[str] = None
    requires_gender_parity: bool = False


class GameSessionDocument(Document):
    id: str
    room_id: str
    current_question_index: int = 0
    question_ids: List[str] = Field(default_factory=list)
    game_state: GameState = GameState.QUESTION
    question_start_time: Optional[str] = None
    question_end_time: Optional[str] = None
    created_at: str
    updated_at: str
    is_test: bool = False


class RoomParticipantDocument(Document):
    id: str
    room_id: str
    user_id: str
    status: ParticipantStatus
    requested_at: Optional[str] = None
    approved_at: Optional[str] = None
    paid_at: Optional[str] = None
    payment_reference: Optional[str] = None
    score: int = 0
    created_at: str
    updated_at: str


# ----------------------------- API ---------------------------------
class CollectionSummary(BaseModel):
    created: int = 0
    skipped: int = 0
    merged: int = 0


class SeedResponse(BaseModel):
    ok: bool = True
    seeded: bool = True
    actorUid: str
    summary: Dict[str, CollectionSummary] = Field(default_factory=dict)


class SeedUserResponse(BaseModel):
    ok: bool = True
    path: str
    data: Dict[str, Any]


class TokenRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    id_token: str
    token_type: str = "bearer"
    expires_in: int
    uid: str


class ActorResponse(BaseModel):
    uid: str
    email: Optional[str] = None
