import json

import pytest

from scripts.seed_db import SAMPLE_REPORTS, load_seed, write_reports


def test_dry_run_writes_nothing(report_store):
    assert write_reports(report_store, SAMPLE_REPORTS, apply=False) == 0
    assert report_store.count() == 0


def test_apply_inserts_pending_reports(report_store):
    written = write_reports(report_store, SAMPLE_REPORTS, apply=True)

    assert written == len(SAMPLE_REPORTS)
    assert all(r.status.value == "pending" for r in report_store.list())


def test_invalid_seed_entries_are_skipped(report_store, valid_report):
    written = write_reports(report_store, [valid_report, dict(valid_report, severity="extreme")], apply=True)

    assert written == 1


def test_load_seed_requires_list(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps({"location": "nowhere"}))

    with pytest.raises(ValueError):
        load_seed(str(path))
