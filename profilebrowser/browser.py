"""Contrôleur de la vue : saisie utilisateur et orchestration des requêtes."""

from __future__ import annotations

import logging
import random
from concurrent.futures import Future
from typing import Any, Callable

from profilebrowser import transitions
from profilebrowser.config import BrowserConfig
from profilebrowser.services import GitHubService, GitHubServiceError
from profilebrowser.state import Mode, UserSummary, ViewState

logger = logging.getLogger(__name__)

RANDOM_COUNT_MAX = 30

Job = Callable[[], Any]
Callback = Callable[[Future], None]
Runner = Callable[[Job, Callback], None]
Listener = Callable[[ViewState], None]


class ValidationError(ValueError):
    """Saisie refusée avant tout appel réseau."""


def run_inline(job: Job, callback: Callback) -> None:
    """Exécute ``job`` immédiatement puis transmet le résultat à ``callback``."""
    future: Future = Future()
    try:
        future.set_result(job())
    except Exception as exc:  # noqa: BLE001
        future.set_exception(exc)
    callback(future)


def validate_username(raw_username: str) -> str:
    """Retourne l'identifiant nettoyé ou lève :class:`ValidationError`."""
    username = (raw_username or "").strip()
    if not username:
        raise ValidationError("Please enter a username")
    return username


class ProfileBrowser:
    """Possède l'état de la vue et le remplace à chaque action.

    ``runner`` décide où s'exécutent les requêtes bloquantes ; son callback doit
    être rappelé sur le fil de l'interface. Par défaut tout est synchrone.
    """

    def __init__(
        self,
        service: GitHubService,
        config: BrowserConfig | None = None,
        *,
        runner: Runner = run_inline,
        rng: random.Random | None = None,
    ) -> None:
        self._service = service
        self._config = config or BrowserConfig()
        self._run = runner
        self._rng = rng or random.Random()
        self._listeners: list[Listener] = []
        self._mounted = False
        self.state = ViewState()
        self.last_error: Exception | None = None

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _replace(self, new_state: ViewState) -> None:
        self.state = new_state
        for listener in self._listeners:
            listener(new_state)

    # ---------------------------------------------------------------- Saisie -
    def set_count(self, raw: object) -> None:
        self._replace(transitions.set_count(self.state, raw))

    def set_username(self, text: str) -> None:
        self._replace(transitions.set_username(self.state, text))

    def set_mode(self, mode: Mode) -> None:
        self._replace(transitions.set_mode(self.state, mode))

    def clear(self) -> None:
        self.last_error = None
        self._replace(transitions.clear(self.state))

    def submit(self) -> None:
        """Action de la touche Entrée, selon le mode courant."""
        if self.state.mode is Mode.RANDOM:
            self.fetch_random_batch(self.state.requested_count)
        else:
            self.fetch_single_user(self.state.username_query)

    # -------------------------------------------------------------- Requêtes -
    def mount(self) -> None:
        """Chargement initial, effectué une seule fois."""
        if self._mounted:
            return
        self._mounted = True
        self.fetch_random_batch(self.state.requested_count)

    def fetch_random_batch(self, count: int) -> None:
        since = self._rng.randrange(self._config.since_window)
        self.last_error = None
        self._replace(transitions.begin_request(self.state))
        logger.info("Chargement de %d profils à partir de since=%d", count, since)
        self._run(
            lambda: self._service.list_users(per_page=count, since=since),
            self._on_batch_done,
        )

    def fetch_random_with_random_count(self) -> None:
        count = self._rng.randint(1, RANDOM_COUNT_MAX)
        self._replace(transitions.set_count(self.state, count))
        self.fetch_random_batch(count)

    def fetch_single_user(self, raw_username: str) -> None:
        try:
            username = validate_username(raw_username)
        except ValidationError as exc:
            self.last_error = exc
            self._replace(transitions.reject_input(self.state, str(exc)))
            return

        self.last_error = None
        self._replace(transitions.begin_request(self.state))
        logger.info("Recherche de l'utilisateur %s", username)
        self._run(lambda: self._service.get_user(username), self._on_user_done)

    def _on_batch_done(self, future: Future) -> None:
        try:
            profiles: list[UserSummary] = future.result()
        except GitHubServiceError as exc:
            self.last_error = exc
            self._replace(transitions.batch_failed(self.state, str(exc)))
            return
        except Exception as exc:  # noqa: BLE001
            logger.exception("Erreur inattendue lors du chargement des profils")
            self.last_error = exc
            self._replace(transitions.batch_failed(self.state, str(exc)))
            return

        logger.info("%d profils reçus", len(profiles))
        self._replace(transitions.batch_succeeded(self.state, profiles))

    def _on_user_done(self, future: Future) -> None:
        try:
            profile: UserSummary = future.result()
        except GitHubServiceError as exc:
            self.last_error = exc
            self._replace(transitions.user_failed(self.state, str(exc)))
            return
        except Exception as exc:  # noqa: BLE001
            logger.exception("Erreur inattendue lors de la recherche d'utilisateur")
            self.last_error = exc
            self._replace(transitions.user_failed(self.state, str(exc)))
            return

        self._replace(transitions.user_succeeded(self.state, profile))
