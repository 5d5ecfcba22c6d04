"""
Core — Activity Trail Service

Write-once sink for inventory events. Ledger services call ``emit``;
the event is handed to Celery only after the surrounding transaction
commits, so rolled-back work never leaves a trail entry. Failures are
logged for later reconciliation and never undo a ledger mutation.

@file core/services.py
"""

import logging
from datetime import date
from typing import Any

from django.conf import settings
from django.db import DatabaseError, transaction
from kombu.exceptions import OperationalError as BrokerError

from core.exceptions import ActivityTrailWriteFailed
from core.models import ActivityEvent

logger = logging.getLogger('fuelledger')


class ActivityTrailService:
    """Append-only activity trail for lot creations and transfers."""

    @staticmethod
    def append(
        *,
        action: str,
        entity_type: str,
        entity_id: str,
        unit_id: str | None = None,
        op_date: str | None = None,
        amount_liters: int | None = None,
        payload: dict[str, Any] | None = None,
        actor_id: int | None = None,
    ) -> ActivityEvent:
        try:
            with transaction.atomic():
                return ActivityEvent.objects.create(
                    action=action,
                    entity_type=entity_type,
                    entity_id=str(entity_id),
                    unit_id=unit_id,
                    op_date=date.fromisoformat(op_date) if op_date else None,
                    amount_liters=amount_liters,
                    payload=payload,
                    actor_id=actor_id,
                )
        except DatabaseError as exc:
            logger.error(
                'ActivityTrailWriteFailed %s %s:%s: %s',
                action, entity_type, entity_id, exc,
            )
            raise ActivityTrailWriteFailed(str(exc)) from exc

    @staticmethod
    def emit(**event) -> None:
        """
        Queue ``event`` for the trail once the current transaction commits.
        Values must be JSON-serialisable (ids and dates as strings).
        """
        if not settings.ACTIVITY_TRAIL_ENABLED:
            return

        def _send():
            from core.tasks import append_activity_event_task

            try:
                append_activity_event_task.delay(event)
            except BrokerError as exc:
                logger.error(
                    'ActivityTrailWriteFailed (broker) %s:%s: %s',
                    event.get('entity_type'), event.get('entity_id'), exc,
                )

        transaction.on_commit(_send)
