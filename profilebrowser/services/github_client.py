"""Encapsulation des appels à l'API publique des utilisateurs GitHub."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from profilebrowser.config import BrowserConfig
from profilebrowser.state import UserSummary

logger = logging.getLogger(__name__)

GITHUB_MEDIA_TYPE = "application/vnd.github+json"


class GitHubServiceError(RuntimeError):
    """Erreur générique levée lors des appels à l'API GitHub."""


class FetchError(GitHubServiceError):
    """La requête a abouti mais le statut HTTP signale un échec."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UserNotFoundError(FetchError):
    """L'utilisateur demandé n'existe pas (HTTP 404)."""

    def __init__(self, username: str) -> None:
        super().__init__(f"User '{username}' not found", status_code=404)
        self.username = username


class TransportError(GitHubServiceError):
    """La requête n'a pas pu aboutir ou la réponse est illisible."""


class GitHubService:
    """Service responsable des appels à l'annuaire des utilisateurs."""

    def __init__(self, config: BrowserConfig, *, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._session.headers.update(
            {"Accept": GITHUB_MEDIA_TYPE, "User-Agent": config.user_agent}
        )

    def list_users(self, *, per_page: int, since: int) -> list[UserSummary]:
        """Retourne une page d'utilisateurs dont l'identifiant suit ``since``."""
        response = self._get(
            self._config.users_url(),
            params={"per_page": per_page, "since": since},
        )
        if not response.ok:
            logger.warning("GET /users a répondu %s", response.status_code)
            raise FetchError("Failed to fetch profiles", status_code=response.status_code)

        payload = self._decode(response)
        if not isinstance(payload, list):
            raise TransportError("Unexpected response: expected a list of users")
        try:
            return [UserSummary.from_api(item) for item in payload]
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"Malformed user record: {exc}") from exc

    def get_user(self, username: str) -> UserSummary:
        """Retourne le profil complet de ``username`` (correspondance exacte)."""
        response = self._get(self._config.users_url(quote(username, safe="")))
        if response.status_code == 404:
            logger.info("Utilisateur introuvable : %s", username)
            raise UserNotFoundError(username)
        if not response.ok:
            logger.warning("GET /users/%s a répondu %s", username, response.status_code)
            raise FetchError("Failed to fetch user", status_code=response.status_code)

        payload = self._decode(response)
        if not isinstance(payload, dict):
            raise TransportError("Unexpected response: expected a user object")
        try:
            return UserSummary.from_api(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"Malformed user record: {exc}") from exc

    def close(self) -> None:
        self._session.close()

    def _get(self, url: str, params: dict[str, Any] | None = None) -> requests.Response:
        logger.info("GET %s %s", url, params or "")
        try:
            return self._session.get(url, params=params, timeout=self._config.timeout)
        except requests.RequestException as exc:
            logger.warning("Échec réseau pour %s : %s", url, exc)
            raise TransportError(str(exc)) from exc

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"Invalid JSON in response: {exc}") from exc
