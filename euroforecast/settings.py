from pathlib import Path
import os
import dj_database_url

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'unsafe-dev-secret')
DEBUG = os.getenv('DJANGO_DEBUG', '1') == '1'
ALLOWED_HOSTS = [host for host in os.getenv('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if host]

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'apps.euromillions.apps.EuroMillionsConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'euroforecast.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'euroforecast.wsgi.application'
ASGI_APPLICATION = 'euroforecast.asgi.application'

DATABASES = {
    'default': dj_database_url.config(
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
        conn_max_age=600,
    )
}

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

LANGUAGE_CODE = 'en-us'
# Draws take place at 21:05 CET.
TIME_ZONE = 'Europe/Brussels'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
MEDIA_ROOT = BASE_DIR / 'media'

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedStaticFilesStorage',
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Uploaded CSVs land in memory before being spooled to MEDIA_ROOT.
FILE_UPLOAD_MAX_MEMORY_SIZE = 5 * 1024 * 1024

EUROMILLIONS_STORAGE = os.getenv(
    'EUROMILLIONS_STORAGE',
    'database' if os.getenv('DATABASE_URL') else 'memory',
)

EUROMILLIONS_GAME = {
    'game_name': 'EuroMillions',
    'main_count': 5,
    'max_number': 50,
    'star_count': 2,
    'max_star': 12,
    'default_model_version': 'v2.4.1',
}

EUROMILLIONS_CONFIG = {
    'EXCHANGE_RATE': {
        'URL': os.getenv('EXCHANGE_RATE_URL', 'https://api.exchangerate-api.com/v4/latest/EUR'),
        'INTERVAL': int(os.getenv('EXCHANGE_RATE_INTERVAL', '120')),
        'FALLBACK_RATE': float(os.getenv('EXCHANGE_RATE_FALLBACK', '21.01')),
        'TIMEOUT': int(os.getenv('EXCHANGE_RATE_TIMEOUT', '10')),
    },
    'JACKPOT': {
        'AMOUNT': float(os.getenv('JACKPOT_AMOUNT', '74000000')),
        'CURRENCY': 'EUR',
        'DRAW_NUMBER': int(os.getenv('JACKPOT_DRAW_NUMBER', '1852')),
    },
    'UPLOAD_DIR': 'uploads',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'loggers': {
        'euromillions': {
            'handlers': ['console'],
            'level': os.getenv('EUROMILLIONS_LOG_LEVEL', 'INFO'),
        },
    },
}
