from __future__ import annotations

from mister_deejay.application.app import App
from mister_deejay.infrastructure.logging import setup_logging
from mister_deejay.infrastructure.settings import Settings

settings = Settings()
# Configure logging before the app logs anything
setup_logging(settings.log_level, settings.log_format, settings.sql_echo)

app = App(settings)
