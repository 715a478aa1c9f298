# heritage_recipes/core/log_config.py
# Root logger setup, called once when the app (or an admin script) starts

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # motor/pymongo heartbeat logs are noisy at DEBUG
    logging.getLogger("pymongo").setLevel(max(logging.getLogger().level, logging.INFO))
