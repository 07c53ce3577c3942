"""
Seed script for the Street Dog Alert mock DB or Firestore.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured DB: python scripts/seed_db.py --apply
  - Force mock DB even if FIREBASE configured: python scripts/seed_db.py --apply --force-mock
  - Custom seed file: python scripts/seed_db.py --seed ./my_reports.json --apply

Behavior:
  - Loads a JSON list of reports (falls back to the built-in samples).
  - Inserts each through ReportStore so ids, timestamps and "pending"
    status are assigned exactly as for a citizen submission.
  - Does NOT send notifications.

NOTE: When applying to real Firestore, ensure `FIREBASE_CREDENTIALS_PATH` and `USE_MOCK_DB=false` are set in `.env`.
"""

import argparse
import json
import os
from typing import List

from app.core.exceptions import AppError
from app.core.settings import settings

SAMPLE_REPORTS: List[dict] = [
    {
        "location": "MG Road, Near City Mall",
        "severity": "high",
        "dogCount": "6-10",
        "description": "Pack of aggressive dogs blocking pedestrian path",
        "contactNumber": "+91 9876543210",
        "reportedBy": "Rajesh Kumar",
    },
    {
        "location": "Sector 14 Park, East Gate",
        "severity": "medium",
        "dogCount": "3-5",
        "description": "Dogs chasing cyclists in the evening",
        "contactNumber": "+91 9123456780",
        "reportedBy": "Priya Sharma",
    },
    {
        "location": "Railway Colony Bus Stop",
        "severity": "low",
        "dogCount": "1-2",
        "description": "Injured puppy near the shelter, needs a vet",
        "contactNumber": "+91 9988776655",
    },
]


def load_seed(path: str) -> List[dict]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Seed file {path} must contain a JSON list of reports")
    return data


def write_reports(store, reports: List[dict], apply: bool = False) -> int:
    written = 0
    for report in reports:
        print(f"Preparing: {report.get('location')} ({report.get('severity')})")
        if not apply:
            continue
        try:
            stored = store.insert(report)
            written += 1
            print(f"Wrote: reports/{stored.id}")
        except AppError as e:
            print(f"Failed to write report at {report.get('location')}: {e.message}")
    return written


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the DB instead of dry-run")
    parser.add_argument("--force-mock", action="store_true", help="Force use of mock DB even if FIREBASE configured")
    parser.add_argument("--seed", default=os.path.join(os.getcwd(), "db_seed.json"), help="Path to a JSON list of reports")
    args = parser.parse_args()

    if os.path.exists(args.seed):
        reports = load_seed(args.seed)
    else:
        print(f"Seed file not found: {args.seed}, using built-in sample reports")
        reports = SAMPLE_REPORTS

    if args.force_mock:
        print("Forcing mock DB usage for this run.")
        # Settings are read once at import; flip the flag before the store is resolved
        settings.USE_MOCK_DB = True

    from app.services.document_store import get_document_store
    from app.services.report_store import ReportStore

    store = ReportStore(get_document_store())
    written = write_reports(store, reports, apply=args.apply)

    if args.apply:
        print(f"Seeding completed: {written}/{len(reports)} reports written.")
    else:
        print("Dry run complete. Re-run with --apply to write to DB.")


if __name__ == "__main__":
    main()
