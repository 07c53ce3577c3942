import pytest

from app.core.exceptions import TransitionNotAllowedError
from app.models.report import ReportStatus
from app.services.status_workflow import StatusWorkflowEngine


def test_default_engine_allows_everything():
    engine = StatusWorkflowEngine()

    assert not engine.is_restricted
    for src in ReportStatus:
        for dst in ReportStatus:
            assert engine.is_valid_transition(src, dst)
    assert engine.get_allowed_transitions(ReportStatus.RESOLVED) == ["pending", "in-progress", "dismissed"]


def test_allow_list_restricts_moves():
    engine = StatusWorkflowEngine({"pending": ["in-progress", "dismissed"]})

    assert engine.is_valid_transition(ReportStatus.PENDING, ReportStatus.IN_PROGRESS)
    assert not engine.is_valid_transition(ReportStatus.PENDING, ReportStatus.RESOLVED)
    assert not engine.is_valid_transition(ReportStatus.RESOLVED, ReportStatus.PENDING)
    # Same-status updates are no-ops
    assert engine.is_valid_transition(ReportStatus.RESOLVED, ReportStatus.RESOLVED)


def test_validate_transition_reports_the_status_field():
    engine = StatusWorkflowEngine({"pending": ["in-progress"]})

    with pytest.raises(TransitionNotAllowedError) as exc_info:
        engine.validate_transition(ReportStatus.PENDING, ReportStatus.DISMISSED)

    assert exc_info.value.status_code == 422
    assert exc_info.value.errors[0]["field"] == "status"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_from_config_empty_is_unrestricted(raw):
    assert not StatusWorkflowEngine.from_config(raw).is_restricted


def test_from_config_parses_json():
    engine = StatusWorkflowEngine.from_config('{"pending": ["in-progress"], "in-progress": ["resolved", "dismissed"]}')

    assert engine.is_restricted
    assert engine.get_allowed_transitions(ReportStatus.IN_PROGRESS) == ["resolved", "dismissed"]


@pytest.mark.parametrize("raw", ["{not json", '["pending"]', '{"pending": ["closed"]}'])
def test_from_config_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        StatusWorkflowEngine.from_config(raw)
