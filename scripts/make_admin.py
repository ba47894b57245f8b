#!/usr/bin/env python3
"""
Grant admin rights to an existing account.

Admins can change the status of any placement.
Usage: python scripts/make_admin.py student@college.edu
"""
import sys
sys.path.insert(0, '.')

from portal.db.postgres import get_engine, init_schema
from portal.db.store import Store


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/make_admin.py <email>")
        sys.exit(1)

    email = sys.argv[1].lower()
    engine = get_engine()
    init_schema(engine)
    store = Store(engine)

    user = store.unique("users.by_email", email)
    if not user:
        print(f"❌ No account registered with {email}")
        sys.exit(1)

    store.patch("users", user["user_id"], {"is_admin": True})
    print(f"✅ {email} is now an admin")


if __name__ == "__main__":
    main()
