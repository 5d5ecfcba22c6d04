"""
Core — Celery Tasks

Delivery of activity trail events. At-least-once: a failed write is
retried with backoff.

@file core/tasks.py
"""

import logging

from celery import shared_task

from core.exceptions import ActivityTrailWriteFailed

logger = logging.getLogger('fuelledger')


@shared_task(
    name='core.append_activity_event',
    autoretry_for=(ActivityTrailWriteFailed,),
    retry_backoff=True,
    max_retries=5,
)
def append_activity_event_task(event):
    from .services import ActivityTrailService

    record = ActivityTrailService.append(**event)
    logger.debug('Activity event %s stored for %s:%s', record.pk, record.entity_type, record.entity_id)
    return str(record.pk)
