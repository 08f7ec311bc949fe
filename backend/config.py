"""
Runtime settings, read from the environment (and a local .env file).

  EUSQ_LOG_LEVEL       logging level name            (default INFO)
  EUSQ_STRICT_ANSWERS  validate answers before use   (default true)
  EUSQ_INCLUDE_TRACE   print the node trace (stderr) (default false)
"""

import logging
import os
from typing import NamedTuple

from dotenv import load_dotenv

_TRUE = {"1", "true", "yes", "on"}


class Settings(NamedTuple):
    log_level: str = "INFO"
    strict_answers: bool = True
    include_trace: bool = False


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        log_level=os.getenv("EUSQ_LOG_LEVEL", "INFO").upper(),
        strict_answers=_flag("EUSQ_STRICT_ANSWERS", True),
        include_trace=_flag("EUSQ_INCLUDE_TRACE", False),
    )


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
