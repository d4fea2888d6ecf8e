"""Seed the NYC demo data straight into the configured database.

Usage:
    python scripts/seed_demo.py [--scenario all|waiting|live] [--namespace test_]

Same writes as `POST /api/seed_nyc_demo`, without HTTP or a bearer token.
Safe to run repeatedly.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from echomatch import config
from echomatch.database import SessionLocal, init_db
from echomatch.errors import StoreUnavailable
from echomatch.seed import Scenario, seed_demo
from echomatch.store import DocumentStore


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed EchoMatch demo data")
    parser.add_argument("--scenario", choices=[s.value for s in Scenario], default=Scenario.ALL.value)
    parser.add_argument("--namespace", default=None, help="Prefix for every seeded document id")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL)
    keys = config.DEMO_KEYS
    if args.namespace is not None:
        keys = replace(keys, namespace=args.namespace)

    init_db()
    db = SessionLocal()
    try:
        report = seed_demo(DocumentStore(db), Scenario(args.scenario), keys=keys)
    except StoreUnavailable as exc:
        print(f"Seed failed: {exc.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(json.dumps(report.as_dict(), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
