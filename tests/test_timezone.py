from datetime import date, datetime

import pytz

from src.payroll.config import settings
from src.payroll.utils.timezone import LOCAL_TZ, format_day_month_year, month_year, now_local


def test_local_timezone_comes_from_settings():
    assert LOCAL_TZ.zone == settings.TIMEZONE


def test_now_local_is_aware():
    assert now_local().tzinfo is not None


def test_month_year_and_day_month_year():
    dt = pytz.timezone("Asia/Kolkata").localize(datetime(2025, 3, 14, 10, 30))
    assert month_year(dt) == ("March", "2025")
    assert format_day_month_year(date(2022, 4, 1)) == "01/04/2022"
