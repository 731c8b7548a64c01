"""Configuration de la journalisation de l'application."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Installe le format de journalisation commun à toute l'application."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    # urllib3 est très bavard en DEBUG
    logging.getLogger("urllib3").setLevel(max(numeric_level, logging.INFO))
