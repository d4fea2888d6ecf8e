"""Static demo tables for the NYC scenarios.

Plain immutable records; `echomatch.seed` turns them into documents.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

from echomatch.schemas import RoomStatus


NYC_CITY = "New York, New York, United States"


@dataclass(frozen=True)
class DemoUser:
    id: str
    email: str
    username: str
    gender: str
    city: str
    bio: str


@dataclass(frozen=True)
class DemoQuestion:
    id: str
    text: str
    options: Tuple[str, ...]
    category: str


@dataclass(frozen=True)
class RoomTemplate:
    title: str
    description: str
    status: RoomStatus
    scheduled_start_offset: timedelta
    actual_start_offset: Optional[timedelta] = None
    city: str = NYC_CITY
    max_participants: int = 10
    entry_fee: float = 0.0
    requires_gender_parity: bool = True


USERS: Tuple[DemoUser, ...] = (
    DemoUser("u_brooklyn_amy", "amy.brooklyn@example.com", "Amy", "female", "Brooklyn, New York, United States", "Coffee lover ☕ | Board games and trivia night"),
    DemoUser("u_brooklyn_mike", "mike.brooklyn@example.com", "Mike", "male", "Brooklyn, New York, United States", "Runner 🏃 | Tech enthusiast"),
    DemoUser("u_queens_sara", "sara.queens@example.com", "Sara", "female", "Queens, New York, United States", "Artist 🎨 | Music festivals"),
    DemoUser("u_queens_jay", "jay.queens@example.com", "Jay", "male", "Queens, New York, United States", "Foodie 🍣 | Knicks fan"),
    DemoUser("u_nyc_lena", "lena.nyc@example.com", "Lena", "female", NYC_CITY, "Product designer ✨ | Yoga + travel"),
    DemoUser("u_nyc_omar", "omar.nyc@example.com", "Omar", "male", NYC_CITY, "Standup comedy fan 🎤 | Street photography"),
)

QUESTIONS: Tuple[DemoQuestion, ...] = (
    DemoQuestion("q1", "Which weekend plan sounds most fun?", ("Museum day", "Hiking", "Cooking class", "Beach hang"), "vibes"),
    DemoQuestion("q2", "Pick a New York snack:", ("Bagel + schmear", "Dollar slice", "Halal cart", "Ramen"), "food"),
    DemoQuestion("q3", "Ideal first hangout?", ("Coffee", "Drinks", "Walk in the park", "Live show"), "date"),
    DemoQuestion("q4", "You get one ticket to:", ("Comedy", "Concert", "Broadway", "Sports"), "events"),
    DemoQuestion("q5", "Night owl or early bird?", ("Night owl", "Early bird", "Depends on the day", "Perpetual napper"), "lifestyle"),
    DemoQuestion("q6", "Pick a borough energy:", ("Manhattan", "Brooklyn", "Queens", "Bronx/Staten"), "nyc"),
    DemoQuestion("q7", "How do you recharge?", ("Solo time", "Close friends", "Outdoors", "Creative work"), "vibes"),
    DemoQuestion("q8", "Your texting style:", ("Short + quick", "Paragraphs", "Voice notes", "Memes/gifs"), "communication"),
)

# Both rooms play the first five questions
ROOM_QUESTION_IDS: Tuple[str, ...] = ("q1", "q2", "q3", "q4", "q5")

QUESTION_DIFFICULTY = "medium"
QUESTION_TIME_LIMIT_SECONDS = 30

WAITING_ROOM = RoomTemplate(
    title="NYC EchoMatch Mixer",
    description="A quick-fire mini game to find great vibes near you.",
    status=RoomStatus.WAITING,
    scheduled_start_offset=timedelta(hours=1),
)

LIVE_ROOM = RoomTemplate(
    title="NYC Live Game",
    description="Jump in to test the full flow now.",
    status=RoomStatus.IN_PROGRESS,
    scheduled_start_offset=timedelta(minutes=-15),
    actual_start_offset=timedelta(minutes=-10),
)

# Participant lifecycle timestamps, relative to the run's "now"
PARTICIPANT_REQUESTED_OFFSET = timedelta(minutes=-30)
PARTICIPANT_APPROVED_OFFSET = timedelta(minutes=-25)
PARTICIPANT_PAID_OFFSET = timedelta(minutes=-20)
PARTICIPANT_PAYMENT_REFERENCE = "demo"

SESSION_QUESTION_DURATION = timedelta(seconds=QUESTION_TIME_LIMIT_SECONDS)


@dataclass(frozen=True)
class SeedUserProfile:
    email: str = "seed@demo.local"
    username: str = "citygirl"
    city: str = "New York"
    gender: str = "female"
    bio: Optional[str] = None


SEED_USER_PROFILE = SeedUserProfile()
