"""Logging setup shared by the API and the RDW services."""
import logging

from .config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def get_logger(name: str = "kentekenzoeker") -> logging.Logger:
    level = get_settings().LOG_LEVEL.upper()
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, level, logging.INFO))
    return logging.getLogger(name)
