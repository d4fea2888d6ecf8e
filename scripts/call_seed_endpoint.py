#!/usr/bin/env python3
"""Log in against a running server and call the seed endpoints.

Usage:
    python scripts/call_seed_endpoint.py --email me@example.com --password secret [--api-url http://localhost:8000] [--user-doc]
"""

import argparse
import sys

import requests

API_URL = "http://localhost:8000"


def get_token(api_url: str, email: str, password: str) -> str:
    response = requests.post(f"{api_url}/api/auth/token", json={"email": email, "password": password}, timeout=10)
    response.raise_for_status()
    return response.json()["id_token"]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Call the EchoMatch seed endpoints")
    parser.add_argument("--api-url", default=API_URL)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--scenario", default="all")
    parser.add_argument("--user-doc", action="store_true", help="Also call /api/seed_user_doc")
    args = parser.parse_args(argv)

    try:
        token = get_token(args.api_url, args.email, args.password)
    except requests.RequestException as exc:
        print(f"Login failed: {exc}", file=sys.stderr)
        return 1

    response = requests.post(
        f"{args.api_url}/api/seed_nyc_demo",
        params={"scenario": args.scenario},
        headers={"Authorization": f"Bearer {token}"},
        timeout=30,
    )
    print(f"seed_nyc_demo -> {response.status_code}: {response.text}")
    if response.status_code != 200:
        return 1

    if args.user_doc:
        response = requests.post(f"{args.api_url}/api/seed_user_doc", timeout=30)
        print(f"seed_user_doc -> {response.status_code}: {response.text}")
        if response.status_code != 200:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
