from __future__ import annotations

import atexit
from dataclasses import dataclass

from django.apps import AppConfig, apps
from django.conf import settings

from .services.exchange_rate import ExchangeRateService
from .services.storage import DrawStorage, build_storage


@dataclass
class Services:
    storage: DrawStorage
    exchange_rates: ExchangeRateService


class EuroMillionsConfig(AppConfig):
    name = 'apps.euromillions'
    label = 'euromillions'
    verbose_name = 'EuroMillions'
    default_auto_field = 'django.db.models.BigAutoField'

    services: Services | None = None

    def ready(self):
        rate_config = settings.EUROMILLIONS_CONFIG['EXCHANGE_RATE']
        self.services = Services(
            storage=build_storage(settings.EUROMILLIONS_STORAGE),
            exchange_rates=ExchangeRateService(
                url=rate_config['URL'],
                interval=rate_config['INTERVAL'],
                fallback_rate=rate_config['FALLBACK_RATE'],
                timeout=rate_config['TIMEOUT'],
            ),
        )


def get_services() -> Services:
    return apps.get_app_config('euromillions').services


def start_background_services() -> None:
    """Start the exchange rate poller for a serving process."""
    exchange_rates = get_services().exchange_rates
    if not exchange_rates.is_running:
        exchange_rates.start()
        atexit.register(exchange_rates.stop)
