#!/usr/bin/env python3
"""
Seed Script

Creates tables, then loads regions/districts, the skill catalogue and
(unless --no-demo) demo accounts and jobs.
Usage: python scripts/seed.py [--no-demo]
"""
import argparse
import logging
import sys
sys.path.insert(0, '.')

from skillshub.db.database import get_db_session, init_db
from skillshub.db.seed import seed_all, ADMIN


def main():
    parser = argparse.ArgumentParser(description="Seed the SkillsHub database")
    parser.add_argument("--no-demo", action="store_true", help="Only load reference data")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")

    init_db()
    with get_db_session() as db:
        seed_all(db, demo=not args.no_demo)

    print("Seeding complete.")
    if not args.no_demo:
        print(f"Admin login: {ADMIN['email']} / {ADMIN['password']}")


if __name__ == "__main__":
    main()
