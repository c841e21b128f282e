"""
Outcome notifications for the caller-facing layer.

The presentation layer renders outcomes as toasts; on the server side an
outcome is recorded as a structured log event.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog
from src.domain.errors import ErrorKind, Outcome

logger = structlog.get_logger(__name__)


class NotifierProtocol(Protocol):
    """Protocol for outcome notifiers (allows swapping in tests)."""

    async def notify(self, operation: str, outcome: Outcome, **context: Any) -> None: ...


class LogNotifier:
    """Record outcomes as structlog events."""

    # Kinds that point at a client or programming error rather than user input
    UNEXPECTED_KINDS = frozenset({ErrorKind.INVALID_TRANSITION, ErrorKind.UNRECOGNIZED})

    async def notify(self, operation: str, outcome: Outcome, **context: Any) -> None:
        if outcome.ok:
            await logger.ainfo("outcome_success", operation=operation, **context)
            return

        fields = {
            "operation": operation,
            "reason": outcome.reason.value if outcome.reason else None,
            "detail": outcome.detail,
            "retryable": bool(outcome.reason and outcome.reason.retryable),
            **context,
        }
        if outcome.reason in self.UNEXPECTED_KINDS or outcome.reason is ErrorKind.STORE_UNAVAILABLE:
            await logger.aerror("outcome_failure", **fields)
        else:
            await logger.awarning("outcome_failure", **fields)


_notifier: NotifierProtocol = LogNotifier()


def get_notifier() -> NotifierProtocol:
    return _notifier
