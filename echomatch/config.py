"""Runtime configuration for the EchoMatch seeder.

Values are read from the environment (a local `.env` file is honoured via
python-dotenv). Demo document keys live here too so that tests and scripts can
swap in an isolated namespace instead of touching the shared demo records.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
RATE_LIMIT = os.getenv("RATE_LIMIT", "30/minute")

# Identity provider (signed ID tokens)
IDENTITY_SECRET = os.getenv("IDENTITY_SECRET", "change-this-secret-in-production")
IDENTITY_ALGORITHM = os.getenv("IDENTITY_ALGORITHM", "HS256")
IDENTITY_PROJECT_ID = os.getenv("IDENTITY_PROJECT_ID", "echomatch-demo")
ID_TOKEN_EXPIRE_MINUTES = int(os.getenv("ID_TOKEN_EXPIRE_MINUTES", "60"))

# Account whose profile document the single-user endpoint writes
SEED_USER_UID = os.getenv("SEED_USER_UID", "URcOKBW9c8SXPE6W7pnZeZxAh5o2")


@dataclass(frozen=True)
class DemoKeys:
    """Fixed document keys used by the demo scenarios.

    `namespace` is prepended to every seeded document id, so a non-empty value
    keeps a run isolated from the default demo records.
    """

    namespace: str = ""
    waiting_room_id: str = "nyc_mixer_1"
    live_room_id: str = "nyc_mixer_live"
    live_session_id: str = "gs_nyc_live"
    host_user_id: str = "u_nyc_lena"

    def key(self, raw_id: str) -> str:
        return f"{self.namespace}{raw_id}"


DEMO_KEYS = DemoKeys(namespace=os.getenv("DEMO_NAMESPACE", ""))


__all__ = [
    "LOG_LEVEL",
    "RATE_LIMIT",
    "IDENTITY_SECRET",
    "IDENTITY_ALGORITHM",
    "IDENTITY_PROJECT_ID",
    "ID_TOKEN_EXPIRE_MINUTES",
    "SEED_USER_UID",
    "DemoKeys",
    "DEMO_KEYS",
]
