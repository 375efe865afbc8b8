#!/usr/bin/env python3
"""
Create an admin account for the scorekeeping endpoints.

Usage:
    python scripts/create_admin.py --email admin@example.com --password secret
"""

import sys
import os

# Add the backend directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse

from db.base import init_db, close_db
from db.models import User
from services.auth_service import AuthService


def main():
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    init_db()
    try:
        if User.get_by_email(args.email):
            print(f"User {args.email} already exists")
            sys.exit(1)
        user = AuthService.create_admin(args.email, args.password)
        print(f"Created admin user {user.email} (id={user.id})")
    finally:
        close_db()


if __name__ == "__main__":
    main()
