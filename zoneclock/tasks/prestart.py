"""Prepare the data directory and state table before the app starts."""
from __future__ import annotations

import logging

from zoneclock.config.settings import get_settings
from zoneclock.data.database import init_db
from zoneclock.utils.logging import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(level=settings.log_level)
    init_db()
    logging.getLogger("zoneclock.prestart").info("State store initialised at %s", settings.database_url)


if __name__ == "__main__":
    main()
