# slashbot/slashbot/settings.py
"""
Django settings for the slashbot project.

This file contains the core configuration for the Django application: the
Discord application key, installed apps, middleware and logging. Sensitive
values are loaded from environment variables, optionally via a .env file.
"""

from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

# ==============================================================================
# CORE SETTINGS
# ==============================================================================

# Build paths inside the project like this: BASE_DIR / 'subdir'
BASE_DIR = Path(__file__).resolve().parent.parent
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-slashbot-development-key')
# The DEBUG flag is loaded as a boolean from an environment variable.
DEBUG = os.getenv('DJANGO_DEBUG', 'False') == 'True'

# Define the allowed hosts. For production, set PRODUCTION_HOST to your domain.
ALLOWED_HOSTS = [
    "127.0.0.1",
    "localhost",
]
if os.getenv('PRODUCTION_HOST'):
    ALLOWED_HOSTS.append(os.getenv('PRODUCTION_HOST'))


# ==============================================================================
# APPLICATION-SPECIFIC SETTINGS (Loaded from Environment Variables)
# ==============================================================================

# Hex-encoded Ed25519 public key from the Discord developer portal.
# Validated at startup by discordapp.apps.DiscordappConfig.
DISCORD_PUBLIC_KEY = os.getenv("DISCORD_PUBLIC_KEY")

# Maximum allowed skew, in seconds, between X-Signature-Timestamp and the
# server clock. Unset or empty disables the check.
_tolerance = os.getenv("DISCORD_TIMESTAMP_TOLERANCE", "").strip()
DISCORD_TIMESTAMP_TOLERANCE = int(_tolerance) if _tolerance else None


# ==============================================================================
# DJANGO-SPECIFIC CONFIGURATION
# ==============================================================================

# Application definition
INSTALLED_APPS = [
    'discordapp.apps.DiscordappConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'slashbot.urls'

WSGI_APPLICATION = 'slashbot.wsgi.application'

# Interactions are never stored, so no database is configured.
DATABASES = {}


# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True


# Logging Configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'discordapp': {
            'handlers': ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'INFO'),
            'propagate': True,
        },
    },
}
