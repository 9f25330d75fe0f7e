#!/usr/bin/env python3
"""
CLI script for database utilities
Usage:
    python scripts/db_utils.py display    - Display all database content
    python scripts/db_utils.py clear      - Clear contracts and subgrants
    python scripts/db_utils.py export     - Export database to JSON
    python scripts/db_utils.py stats      - Show database statistics
"""
import sys
import os
import json

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from backend.dbe_tracker.utils.db_utils import (
    display_all_database_content,
    clear_database,
    export_database_to_json,
    get_database_stats
)
from backend.dbe_tracker.core.database import SessionLocal


def main():
    if len(sys.argv) < 2:
        print("Database Utility Script")
        print("=" * 60)
        print("\nUsage:")
        print("  python scripts/db_utils.py display          - Display all database content")
        print("  python scripts/db_utils.py clear            - Clear contracts and subgrants (requires confirmation)")
        print("  python scripts/db_utils.py clear --all      - Also remove users and sessions")
        print("  python scripts/db_utils.py export           - Export database to JSON")
        print("  python scripts/db_utils.py export <file>    - Export to specific file")
        print("  python scripts/db_utils.py stats            - Show database statistics")
        sys.exit(1)

    command = sys.argv[1].lower()
    db = SessionLocal()

    try:
        if command == "display":
            print(display_all_database_content(db))

        elif command == "clear":
            keep_users = "--all" not in sys.argv[2:]
            print("⚠️  WARNING: This will delete data from the database!")
            print("This includes:")
            print("  - All contracts")
            print("  - All subgrants")
            if not keep_users:
                print("  - All users")
                print("  - All sessions")
            print()
            response = input("Type 'DELETE ALL' to confirm: ")
            if response == "DELETE ALL":
                result = clear_database(db=db, confirm=True, keep_users=keep_users)
                print("\n" + "=" * 60)
                print(json.dumps(result, indent=2))
                print("=" * 60)
            else:
                print("Operation cancelled.")

        elif command == "export":
            file_path = sys.argv[2] if len(sys.argv) > 2 else "database_export.json"
            result = export_database_to_json(db=db, file_path=file_path)
            # Data already went to the file
            result.pop("data", None)
            print(json.dumps(result, indent=2))
            if result["status"] == "success":
                print(f"\n✅ Database exported to: {file_path}")

        elif command == "stats":
            stats = get_database_stats(db)

            print("=" * 60)
            print("DATABASE STATISTICS")
            print("=" * 60)
            for table, count in stats.items():
                print(f"  {table.capitalize()}: {count}")
            print("=" * 60)

        else:
            print(f"❌ Unknown command: {command}")
            print("Run without arguments to see usage.")
            sys.exit(1)

    except Exception as e:
        print(f"❌ Error: {str(e)}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)

    finally:
        db.close()


if __name__ == "__main__":
    main()
