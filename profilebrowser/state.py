"""Structures de données partagées entre la couche UI et les services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

DEFAULT_COUNT = 10


class Mode(str, Enum):
    """Mode de recherche actif."""

    RANDOM = "random"
    USERNAME = "username"


def _text_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Projection en lecture seule d'un utilisateur renvoyé par l'API."""

    id: int
    login: str
    avatar_url: str
    profile_url: str
    name: str | None = None
    bio: str | None = None
    location: str | None = None
    public_repo_count: int | None = None
    follower_count: int | None = None
    following_count: int | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> UserSummary:
        """Construit un résumé depuis un enregistrement JSON de l'API.

        Le point d'accès ``/users`` ne renvoie qu'un sous-ensemble des champs :
        les champs optionnels absents restent à ``None``.
        """
        return cls(
            id=int(data["id"]),
            login=str(data["login"]),
            avatar_url=str(data["avatar_url"]),
            profile_url=str(data["html_url"]),
            name=_text_or_none(data.get("name")),
            bio=_text_or_none(data.get("bio")),
            location=_text_or_none(data.get("location")),
            public_repo_count=data.get("public_repos"),
            follower_count=data.get("followers"),
            following_count=data.get("following"),
        )


@dataclass(frozen=True, slots=True)
class ViewState:
    """État de la vue, remplacé en bloc à chaque transition."""

    profiles: tuple[UserSummary, ...] = ()
    requested_count: int = DEFAULT_COUNT
    username_query: str = ""
    is_loading: bool = False
    error_message: str | None = None
    mode: Mode = Mode.RANDOM
