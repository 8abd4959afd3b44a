# slashbot/discordapp/apps.py

import logging

from django.apps import AppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .errors import ConfigurationError
from .security import load_trusted_key

logger = logging.getLogger(__name__)


class DiscordappConfig(AppConfig):
    name = 'discordapp'
    verbose_name = "Discord Interactions"

    def ready(self):
        """Refuses to start without a usable DISCORD_PUBLIC_KEY."""
        try:
            load_trusted_key(getattr(settings, "DISCORD_PUBLIC_KEY", None))
        except ConfigurationError as e:
            logger.error(f"Invalid DISCORD_PUBLIC_KEY setting: {e}")
            raise ImproperlyConfigured(f'Missing or invalid env var "DISCORD_PUBLIC_KEY": {e}') from e
