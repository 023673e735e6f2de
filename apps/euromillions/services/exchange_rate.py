from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
import logging
import random
import threading
from typing import Optional

import requests
from django.utils import timezone

DEFAULT_HEADERS = {
    'Accept': 'application/json',
    'User-Agent': 'euroforecast/1.0 (+exchange-rate-poller)',
}
DEFAULT_URL = 'https://api.exchangerate-api.com/v4/latest/EUR'
DEFAULT_INTERVAL = 120
DEFAULT_FALLBACK_RATE = 21.01
JITTER = 0.05

logger = logging.getLogger('euromillions')


class ExchangeRateError(RuntimeError):
    def __init__(self, message: str, source: str, detail: str | None = None):
        super().__init__(message)
        self.source = source
        self.detail = detail or ''


@dataclass(frozen=True)
class ExchangeRate:
    from_currency: str
    to_currency: str
    rate: float
    last_updated: datetime

    def to_dict(self) -> dict:
        return {
            'from': self.from_currency,
            'to': self.to_currency,
            'rate': self.rate,
            'lastUpdated': self.last_updated,
        }


class ExchangeRateService:
    """Keeps a EUR->ZAR rate fresh from a public API on a background thread.

    Readers only ever see the last stored snapshot; a failed fetch nudges
    the previous rate by a small random jitter instead of raising.
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        interval: int = DEFAULT_INTERVAL,
        fallback_rate: float = DEFAULT_FALLBACK_RATE,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
        rng: Optional[random.Random] = None,
    ):
        self.url = url
        self.interval = interval
        self.timeout = timeout
        self.session = session or requests.Session()
        self.random = rng or random.Random()
        self._current = ExchangeRate('EUR', 'ZAR', fallback_rate, timezone.now())
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def fetch_live_rate(self) -> float:
        try:
            return self._request_rate()
        except ExchangeRateError as exc:
            logger.warning('Failed to fetch live exchange rate from %s: %s (%s)', exc.source, exc, exc.detail)
            return self._current.rate + (self.random.random() - 0.5) * 2 * JITTER

    def update_rate(self) -> ExchangeRate:
        rate = self.fetch_live_rate()
        self._current = replace(self._current, rate=round(rate, 2), last_updated=timezone.now())
        logger.info('Updated EUR to ZAR rate: %s', self._current.rate)
        return self._current

    def get_current_rate(self) -> dict:
        return self._current.to_dict()

    def start(self) -> None:
        if self.is_running:
            self.stop()
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name='exchange-rate-poller',
            daemon=True,
        )
        self._thread.start()
        logger.info('Exchange rate auto-update started, interval %ss', self.interval)

    def stop(self, timeout: float | None = 5) -> None:
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            logger.info('Exchange rate auto-update stopped')

    def _run(self, stop_event: threading.Event) -> None:
        self._tick()
        while not stop_event.wait(self.interval):
            self._tick()

    def _tick(self) -> None:
        try:
            self.update_rate()
        except Exception:
            logger.exception('Error updating exchange rate')

    def _request_rate(self) -> float:
        try:
            response = self.session.get(self.url, timeout=self.timeout, headers=DEFAULT_HEADERS)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise ExchangeRateError('Failed to fetch exchange rate', self.url, str(exc)) from exc

        try:
            return float(payload['rates']['ZAR'])
        except (KeyError, TypeError, ValueError) as exc:
            raise ExchangeRateError('Exchange rate payload missing ZAR rate', self.url, str(exc)) from exc
