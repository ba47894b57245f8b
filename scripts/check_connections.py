#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database, MongoDB and completion API are reachable.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from portal.core.config import get_settings
from portal.db.postgres import get_engine, test_db_connection
from portal.db.mongodb import test_mongo_connection
from portal.services.completion_client import get_completion_client


def main():
    settings = get_settings()
    print("=" * 50)
    print("STUDENT PORTAL - CONNECTION CHECK")
    print("=" * 50)

    # Database
    print("\n[1] Checking database...")
    print(f"    URL: {get_engine().url.render_as_string(hide_password=True)}")
    if test_db_connection(get_engine()):
        print("    ✅ Database: CONNECTED")
    else:
        print("    ❌ Database: FAILED")

    # MongoDB
    print("\n[2] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")

    # Completion API (only if API key is set)
    print("\n[3] Checking completion API...")
    if settings.completion_api_key:
        print(f"    Base URL: {settings.completion_base_url}")
        print(f"    Model: {settings.completion_model}")
        try:
            reply = get_completion_client().complete(
                "You are a test assistant.",
                [{"role": "user", "content": "Reply with exactly: OK"}]
            )
            print(f"    ✅ Completion API: CONNECTED ({reply.strip()[:20]})")
        except Exception as e:
            print(f"    ❌ Completion API: FAILED ({e})")
    else:
        print("    ⚠️  Completion API: key not configured (chat will use fallback replies)")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
