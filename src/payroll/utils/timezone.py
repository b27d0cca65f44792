# src/payroll/utils/timezone.py
from __future__ import annotations

import logging
from datetime import datetime, date
from typing import Callable, Tuple

import pytz

from src.payroll.config import settings

# -----------------------------------------------------------------------------
# Configure local timezone with fallback
# -----------------------------------------------------------------------------
# Payroll is reported in IST unless TIMEZONE says otherwise
try:
    LOCAL_TZ = pytz.timezone(settings.TIMEZONE)
except pytz.UnknownTimeZoneError as exc:
    logging.getLogger(__name__).warning(
        "Invalid TIMEZONE '%s' in settings; falling back to Asia/Kolkata. Error: %s",
        settings.TIMEZONE,
        exc,
    )
    LOCAL_TZ = pytz.timezone("Asia/Kolkata")

# A clock is any zero-argument callable returning the current datetime.
Clock = Callable[[], datetime]


# -----------------------------------------------------------------------------
# Helper functions
# -----------------------------------------------------------------------------
def now_local() -> datetime:
    """
    Return the current time as a timezone-aware datetime in the configured local timezone.
    """
    return datetime.now(LOCAL_TZ)


def month_year(dt: datetime) -> Tuple[str, str]:
    """
    Pay period label for a datetime, e.g. ("October", "2026").
    """
    return dt.strftime("%B"), str(dt.year)


def format_day_month_year(d: date) -> str:
    """DD/MM/YYYY, the format printed on payslips."""
    return d.strftime("%d/%m/%Y")
