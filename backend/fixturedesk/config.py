"""Runtime settings read from the environment (a local .env file is honoured)."""

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_ACTOR = os.getenv("DEFAULT_ACTOR", "admin")

CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra = os.getenv("CORS_ORIGINS", "")
if _extra:
    CORS_ORIGINS.extend(o.strip() for o in _extra.split(",") if o.strip())


def configure_logging() -> logging.Logger:
    """Attach a console handler to the package logger at LOG_LEVEL."""
    logger = logging.getLogger("fixturedesk")
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    return logger
