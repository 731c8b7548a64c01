"""Gestion centralisée de la configuration du navigateur de profils."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_SINCE_WINDOW = 1_000_000
DEFAULT_USER_AGENT = "profilebrowser/1.0"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(RuntimeError):
    """Erreur levée lorsque la configuration est invalide."""


@dataclass(frozen=True, slots=True)
class BrowserConfig:
    """Paramètres nécessaires pour interroger l'annuaire GitHub."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    since_window: int = DEFAULT_SINCE_WINDOW
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = DEFAULT_LOG_LEVEL

    def users_url(self, username: str | None = None) -> str:
        """Construit l'URL de la ressource ``/users`` (ou d'un utilisateur précis)."""
        if username is None:
            return f"{self.api_url}/users"
        return f"{self.api_url}/users/{username}"


def _read_number(name: str, default: float, cast: type) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return cast(default)
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} doit être un nombre, reçu : {raw!r}") from exc


def load_config() -> BrowserConfig:
    """Charge la configuration depuis l'environnement (et un éventuel ``.env``)."""
    load_dotenv()

    api_url = os.getenv("GITHUB_API_URL", DEFAULT_API_URL).strip().rstrip("/")
    if not api_url:
        raise ConfigError("GITHUB_API_URL ne peut pas être vide.")

    timeout = _read_number("PROFILEBROWSER_TIMEOUT", DEFAULT_TIMEOUT, float)
    if timeout <= 0:
        raise ConfigError("PROFILEBROWSER_TIMEOUT doit être strictement positif.")

    since_window = _read_number("PROFILEBROWSER_SINCE_WINDOW", DEFAULT_SINCE_WINDOW, int)
    if since_window < 1:
        raise ConfigError("PROFILEBROWSER_SINCE_WINDOW doit valoir au moins 1.")

    user_agent = os.getenv("PROFILEBROWSER_USER_AGENT", DEFAULT_USER_AGENT)
    log_level = os.getenv("PROFILEBROWSER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    return BrowserConfig(
        api_url=api_url,
        timeout=timeout,
        since_window=since_window,
        user_agent=user_agent,
        log_level=log_level,
    )
