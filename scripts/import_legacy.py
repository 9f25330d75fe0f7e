#!/usr/bin/env python3
"""
Import contracts exported from an earlier tracker version
Usage:
    python scripts/import_legacy.py <export.json> <owner-email>

The export may be a JSON list of contracts or an object with a "contracts"
key. Imported rows are recorded as created by <owner-email>.
"""
import sys
import os
import json
import logging

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from backend.dbe_tracker.core.config import settings
from backend.dbe_tracker.core.database import SessionLocal
from backend.dbe_tracker.models.user import User
from backend.dbe_tracker.services.legacy_import import import_contracts

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(name)s %(message)s")


def load_rows(file_path):
    with open(file_path, 'r', encoding='utf-8') as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("contracts", [])
    if not isinstance(payload, list):
        raise ValueError("Export must be a list of contracts or an object with a 'contracts' list")
    return payload


def main():
    if len(sys.argv) < 3:
        print("Usage: python scripts/import_legacy.py <export.json> <owner-email>")
        sys.exit(1)

    file_path, email = sys.argv[1], sys.argv[2].lower()
    db = SessionLocal()

    try:
        user = db.query(User).filter(User.email == email).first()
        if not user:
            print(f"❌ No account found for {email}", file=sys.stderr)
            sys.exit(1)

        rows = load_rows(file_path)
        result = import_contracts(db, user, rows)

        print("=" * 60)
        print("LEGACY IMPORT")
        print("=" * 60)
        print(f"  Imported: {result.imported}")
        print(f"  Skipped:  {result.skipped}")
        for error in result.errors:
            print(f"    - {error['contract_number']}: {error['error']}")
        print("=" * 60)

    except (OSError, ValueError) as e:
        print(f"❌ Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    finally:
        db.close()


if __name__ == "__main__":
    main()
