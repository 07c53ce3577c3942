"""
Status Workflow - transition policy for report triage.

DESIGN:
- Default policy is unrestricted: any status may move to any other status,
  including reopening resolved or dismissed reports.
- An allow-list can be configured (STATUS_TRANSITIONS) to restrict moves.
- Same-status updates are always permitted (no-op).
"""

from typing import Dict, Iterable, List, Mapping, Optional, Set
import json
import logging

from app.core.exceptions import TransitionNotAllowedError
from app.core.settings import settings
from app.models.report import ReportStatus

logger = logging.getLogger(__name__)


class StatusWorkflowEngine:
    """
    Transition policy for report status changes.

    Rules:
    - allowed_transitions is None: everything is allowed
    - otherwise only listed {from: [to, ...]} moves are allowed
    """

    def __init__(self, allowed_transitions: Optional[Mapping[ReportStatus, Iterable[ReportStatus]]] = None):
        if allowed_transitions is None:
            self.allowed_transitions: Optional[Dict[ReportStatus, Set[ReportStatus]]] = None
        else:
            self.allowed_transitions = {
                ReportStatus(src): {ReportStatus(dst) for dst in targets}
                for src, targets in allowed_transitions.items()
            }

    @classmethod
    def from_config(cls, raw: Optional[str]) -> "StatusWorkflowEngine":
        """
        Build from the STATUS_TRANSITIONS setting (JSON object or empty).

        Raises:
            ValueError: malformed JSON or unknown status names
        """
        if not raw or not raw.strip():
            return cls()

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"STATUS_TRANSITIONS is not valid JSON: {e}")

        if not isinstance(parsed, dict):
            raise ValueError("STATUS_TRANSITIONS must be a JSON object of {status: [status, ...]}")

        try:
            return cls({src: targets for src, targets in parsed.items()})
        except ValueError as e:
            raise ValueError(f"STATUS_TRANSITIONS contains an unknown status: {e}")

    @property
    def is_restricted(self) -> bool:
        return self.allowed_transitions is not None

    def is_valid_transition(self, from_status: ReportStatus, to_status: ReportStatus) -> bool:
        if from_status == to_status or self.allowed_transitions is None:
            return True
        return to_status in self.allowed_transitions.get(from_status, set())

    def get_allowed_transitions(self, current_status: ReportStatus) -> List[str]:
        """List of statuses reachable from current_status, in enumeration order."""
        if self.allowed_transitions is None:
            return [s.value for s in ReportStatus if s != current_status]
        allowed = self.allowed_transitions.get(current_status, set())
        return [s.value for s in ReportStatus if s in allowed]

    def validate_transition(self, current_status: ReportStatus, new_status: ReportStatus) -> None:
        """
        Raises:
            TransitionNotAllowedError: move not in the allow-list
        """
        if self.is_valid_transition(current_status, new_status):
            return

        allowed = self.get_allowed_transitions(current_status)
        logger.info(f"Rejected status transition {current_status.value} -> {new_status.value}")
        raise TransitionNotAllowedError(
            f"Invalid status transition: {current_status.value} -> {new_status.value}. "
            f"Allowed transitions from {current_status.value}: {allowed}",
            [{"field": "status", "message": f"cannot move from {current_status.value} to {new_status.value}"}],
        )


_workflow_engine: Optional[StatusWorkflowEngine] = None


def get_workflow_engine() -> StatusWorkflowEngine:
    """
    Get or create the StatusWorkflowEngine configured from settings.
    """
    global _workflow_engine
    if _workflow_engine is None:
        _workflow_engine = StatusWorkflowEngine.from_config(settings.STATUS_TRANSITIONS)
        if _workflow_engine.is_restricted:
            logger.info("Status transitions restricted by STATUS_TRANSITIONS allow-list")
    return _workflow_engine
