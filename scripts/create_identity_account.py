"""Create an identity account and print a fresh ID token for it.

Usage:
    python scripts/create_identity_account.py --email me@example.com --password secret [--uid UID]

The printed token goes in `Authorization: Bearer <token>` when calling
`/api/seed_nyc_demo`. Pass `--uid` with the configured SEED_USER_UID to make
`/api/seed_user_doc` succeed.
"""
from __future__ import annotations

import argparse
import sys

from echomatch.database import SessionLocal, init_db
from echomatch.identity import IdentityProvider


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create an identity account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", default=None)
    parser.add_argument("--uid", default=None, help="Fixed uid (default: generated)")
    parser.add_argument("--display-name", default=None)
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        identity = IdentityProvider(db)
        try:
            account = identity.create_account(args.email, password=args.password, uid=args.uid, display_name=args.display_name)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print(f"uid: {account.uid}")
        print(f"id_token: {identity.issue_id_token(account)}")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
