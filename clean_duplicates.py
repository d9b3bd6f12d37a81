"""
Delete duplicate I-9 forms, keeping only the newest one per employee.

Usage:
    python clean_duplicates.py
"""

import sys

from db import Store
from settings import settings


def main():
    if not settings.DATABASE_URL:
        print("DATABASE_URL is not set.")
        sys.exit(1)

    store = Store(settings.DATABASE_URL)
    deleted = store.delete_duplicate_forms()
    print(f"Deleted {deleted} duplicate form(s).")

    counts = store.count_forms_by_status()
    print(f"Total forms remaining: {sum(counts.values())}")
    for status in sorted(counts):
        print(f"  {status:<18} {counts[status]}")


if __name__ == "__main__":
    main()
