"""
Core — Clock

The ledger never calls ``timezone.now()`` directly for business
timestamps; it asks the clock named by ``settings.FUEL_LEDGER_CLOCK``
so tests and back-office replays can pin the current time.

@file core/clock.py
"""

from datetime import date, datetime

from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string


class SystemClock:
    """Wall-clock time in the project's timezone."""

    def now(self) -> datetime:
        return timezone.now()

    def today(self) -> date:
        return timezone.localdate()


def get_clock():
    return import_string(settings.FUEL_LEDGER_CLOCK)()
