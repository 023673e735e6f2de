from __future__ import annotations

from datetime import datetime, time, timedelta, timezone as dt_timezone

from dateutil.relativedelta import relativedelta, TU, FR
from django.conf import settings
from django.utils import timezone

DRAW_WEEKDAYS = (TU, FR)
DRAW_TIME = time(21, 5)


def next_draw_datetime(now: datetime | None = None) -> datetime:
    """Next Tuesday or Friday 21:05 in the project time zone.

    On a draw day the same evening counts until 21:05.
    """
    now = timezone.localtime(now or timezone.now())
    today_draw = now.replace(hour=DRAW_TIME.hour, minute=DRAW_TIME.minute, second=0, microsecond=0)
    start = today_draw if now < today_draw else today_draw + timedelta(days=1)
    candidates = [start + relativedelta(weekday=weekday) for weekday in DRAW_WEEKDAYS]
    return min(candidates)


def get_jackpot_info(now: datetime | None = None) -> dict:
    config = settings.EUROMILLIONS_CONFIG['JACKPOT']
    next_draw = next_draw_datetime(now)
    return {
        'amount': config['AMOUNT'],
        'currency': config['CURRENCY'],
        'nextDrawDate': next_draw.astimezone(dt_timezone.utc).isoformat().replace('+00:00', 'Z'),
        'drawNumber': config['DRAW_NUMBER'],
    }
