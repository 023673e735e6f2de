import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'euroforecast.settings')

application = get_wsgi_application()

from apps.euromillions.apps import start_background_services  # noqa: E402

start_background_services()
