"""Transitions pures de l'état de la vue.

Chaque fonction reçoit l'état courant et renvoie un nouvel état ; aucune ne
modifie son argument ni ne touche au réseau.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Iterable

from profilebrowser.state import DEFAULT_COUNT, Mode, UserSummary, ViewState

MIN_COUNT = 1
MAX_COUNT = 100

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_count(raw: object) -> int:
    """Convertit une saisie libre en nombre de profils compris entre 1 et 100.

    Seul le préfixe entier est lu (``"12abc"`` donne 12) ; une saisie
    illisible donne la valeur par défaut.
    """
    if isinstance(raw, bool):
        value = DEFAULT_COUNT
    elif isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(str(raw)) if raw is not None else None
        value = int(match.group(1)) if match else DEFAULT_COUNT
    return max(MIN_COUNT, min(MAX_COUNT, value))


def set_count(state: ViewState, raw: object) -> ViewState:
    return replace(state, requested_count=parse_count(raw))


def set_username(state: ViewState, text: str) -> ViewState:
    return replace(state, username_query=text)


def set_mode(state: ViewState, mode: Mode) -> ViewState:
    return replace(state, mode=Mode(mode))


def clear(state: ViewState) -> ViewState:
    return replace(state, username_query="", profiles=(), error_message=None)


def begin_request(state: ViewState) -> ViewState:
    return replace(state, is_loading=True, error_message=None)


def reject_input(state: ViewState, message: str) -> ViewState:
    """Erreur de saisie : aucun appel réseau, l'indicateur de chargement reste tel quel."""
    return replace(state, error_message=message)


def batch_succeeded(state: ViewState, profiles: Iterable[UserSummary]) -> ViewState:
    return replace(
        state,
        profiles=tuple(profiles),
        mode=Mode.RANDOM,
        is_loading=False,
    )


def batch_failed(state: ViewState, message: str) -> ViewState:
    # la liste précédente reste affichée
    return replace(state, error_message=message, is_loading=False)


def user_succeeded(state: ViewState, profile: UserSummary) -> ViewState:
    return replace(
        state,
        profiles=(profile,),
        mode=Mode.USERNAME,
        is_loading=False,
    )


def user_failed(state: ViewState, message: str) -> ViewState:
    return replace(state, profiles=(), error_message=message, is_loading=False)
