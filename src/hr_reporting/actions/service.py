"""Approve/reject status transitions with optimistic local updates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..api.client import HRApiClient
from ..common.validators import require_non_empty
from ..core.constants import TOAST_SECONDS
from ..core.enums import Action, IssueStatus, LeaveStatus
from ..core.exceptions import FetchError, ValidationError
from ..reporting.controller import PageController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """Transient toast shown after an action."""

    kind: str
    message: str
    seconds: float = TOAST_SECONDS

    def to_dict(self) -> dict:
        return {"type": self.kind, "message": self.message}


class ActionHandler:
    """One domain's approve/reject endpoints and the status each action yields."""

    label = "Record"
    status_field = "status"
    failure_message = "Action failed"
    statuses: dict[Action, Enum] = {}

    def send(self, api: HRApiClient, record_id: str, action: Action, *, reason: Optional[str], actor: str) -> Any:
        raise NotImplementedError

    def new_status(self, action: Action) -> Enum:
        return self.statuses[action]

    def success_message(self, action: Action) -> str:
        verb = "approved" if action is Action.APPROVE else "rejected"
        return f"{self.label} {verb} successfully"


class KycActions(ActionHandler):
    label = "KYC"
    statuses = {Action.APPROVE: IssueStatus.APPROVED, Action.REJECT: IssueStatus.REJECTED}

    def send(self, api, record_id, action, *, reason, actor):
        return api.post_kyc_action(record_id, action.value, reason=reason)


class LeaveActions(ActionHandler):
    label = "Leave request"
    failure_message = "Failed to update leave status"
    statuses = {Action.APPROVE: LeaveStatus.APPROVED, Action.REJECT: LeaveStatus.REJECTED}

    def send(self, api, record_id, action, *, reason, actor):
        return api.update_leave_status(record_id, self.new_status(action).value, rejection_reason=reason)


class RegularizationActions(ActionHandler):
    label = "Regularization"
    status_field = "regularization_status"
    failure_message = "Failed to update regularization"
    statuses = {Action.APPROVE: LeaveStatus.APPROVED, Action.REJECT: LeaveStatus.REJECTED}

    def send(self, api, record_id, action, *, reason, actor):
        if action is Action.APPROVE:
            return api.approve_regularization(record_id, approved_by=actor)
        return api.reject_regularization(record_id, reason=reason)


HANDLERS: dict[str, ActionHandler] = {
    "kyc": KycActions(),
    "leave": LeaveActions(),
    "regularization": RegularizationActions(),
}


def _server_message(response: Any) -> Optional[str]:
    if isinstance(response, dict):
        msg = response.get("message")
        return str(msg) if msg else None
    return None


class ActionService:
    def __init__(self, api: HRApiClient):
        self._api = api

    def perform(
        self,
        controller: PageController,
        handler: ActionHandler,
        record_id: str,
        action: Action,
        *,
        reason: Optional[str] = None,
        actor: str = "",
    ) -> Notification:
        """Issue exactly one network call for ``record_id`` and reflect the result.

        A reject without a non-blank reason raises ValidationError before any
        call is made. A second request for the same record and action while
        the first is in flight raises ActionInProgressError.
        """
        if action is Action.REJECT:
            reason = require_non_empty(reason or "", "Rejection reason")
        else:
            reason = (reason or "").strip() or None
        if controller.find(record_id) is None:
            raise ValidationError(f"Unknown record: {record_id}")

        try:
            response = controller.run_action(
                record_id,
                action,
                lambda: handler.send(self._api, record_id, action, reason=reason, actor=actor),
            )
        except FetchError as e:
            logger.warning("%s %s failed for %s: %s", handler.label, action.value, record_id, e.message)
            return Notification("error", e.server_message or handler.failure_message)

        controller.replace_record(record_id, **{handler.status_field: handler.new_status(action)})
        logger.info("%s %s for %s", handler.label, action.value, record_id)
        return Notification("success", _server_message(response) or handler.success_message(action))
