"""
Mint a development session token in the identity provider's claim layout.

    python scripts/issue_token.py alice@example.org HR_ADMIN HR_OFFICER
"""
import sys
import os
import argparse

# Ensure we can import app modules
sys.path.append(os.getcwd())

from app.core.config import settings
from app.services.auth import create_access_token


def main():
    parser = argparse.ArgumentParser(description="Issue a development bearer token")
    parser.add_argument("email", help="Caller email, also used as the subject")
    parser.add_argument("groups", nargs="*", help="Identity-provider groups, e.g. SUPER_ADMIN HR_ADMIN")
    parser.add_argument("--name", default=None)
    parser.add_argument("--minutes", type=int, default=60)
    args = parser.parse_args()

    if settings.environment not in ("development", "testing"):
        print("Refusing to mint tokens outside development.", file=sys.stderr)
        sys.exit(1)

    print(create_access_token(
        args.email,
        groups=args.groups,
        name=args.name,
        email=args.email,
        expires_minutes=args.minutes,
    ))

if __name__ == "__main__":
    main()
