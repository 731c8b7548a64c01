"""Modèles de vue dérivés de l'état.

Ces objets contiennent tout ce qu'il faut pour dessiner la fenêtre, textes
déjà formatés ; ``render`` est une fonction pure de :class:`ViewState`.
"""

from __future__ import annotations

from dataclasses import dataclass

from profilebrowser.state import Mode, UserSummary, ViewState

RANDOM_TAB_LABEL = "🔍 Random Users"
USERNAME_TAB_LABEL = "👤 Search by Username"
COUNT_PLACEHOLDER = "Enter number of profiles (1-100)"
USERNAME_PLACEHOLDER = "Enter GitHub username"
NO_USER_TEXT = "No user found."
VIEW_PROFILE_LABEL = "👁️ View Profile"


@dataclass(frozen=True, slots=True)
class ModeToggleView:
    active: Mode
    random_label: str = RANDOM_TAB_LABEL
    username_label: str = USERNAME_TAB_LABEL


@dataclass(frozen=True, slots=True)
class SearchBarView:
    """Barre de recherche visible ; une seule à la fois."""

    mode: Mode
    input_value: str
    placeholder: str
    submit_label: str
    submit_enabled: bool
    secondary_label: str
    secondary_enabled: bool


@dataclass(frozen=True, slots=True)
class CardLine:
    kind: str
    text: str


@dataclass(frozen=True, slots=True)
class CardView:
    key: int
    avatar_url: str
    title: str
    id_text: str
    lines: tuple[CardLine, ...]
    profile_url: str
    link_label: str = VIEW_PROFILE_LABEL


@dataclass(frozen=True, slots=True)
class PageView:
    toggle: ModeToggleView
    search_bar: SearchBarView
    status_text: str
    error_text: str | None
    loading_text: str | None
    cards: tuple[CardView, ...]

    @property
    def card_keys(self) -> tuple[int, ...]:
        return tuple(card.key for card in self.cards)

    def cards_differ(self, rendered: tuple[CardView, ...] | None) -> bool:
        """Vrai si les cartes affichées ne correspondent plus, contenu compris."""
        return rendered != self.cards


def _search_bar(state: ViewState) -> SearchBarView:
    loading = state.is_loading
    if state.mode is Mode.RANDOM:
        return SearchBarView(
            mode=Mode.RANDOM,
            input_value=str(state.requested_count),
            placeholder=COUNT_PLACEHOLDER,
            submit_label="Loading..." if loading else "Search Profiles",
            submit_enabled=not loading,
            secondary_label="Loading..." if loading else "🎲 Random",
            secondary_enabled=not loading,
        )
    return SearchBarView(
        mode=Mode.USERNAME,
        input_value=state.username_query,
        placeholder=USERNAME_PLACEHOLDER,
        submit_label="Searching..." if loading else "🔍 Search User",
        submit_enabled=not loading,
        secondary_label="❌ Clear",
        secondary_enabled=True,
    )


def _status_text(state: ViewState) -> str:
    if state.mode is Mode.RANDOM:
        return f"Showing {len(state.profiles)} random GitHub profiles"
    if state.profiles:
        return f"Showing user: {state.profiles[0].login}"
    return NO_USER_TEXT


def _loading_text(state: ViewState) -> str | None:
    if not state.is_loading:
        return None
    if state.mode is Mode.RANDOM:
        return "Fetching random GitHub profiles..."
    return f"Searching for {state.username_query}..."


def render_card(profile: UserSummary) -> CardView:
    """Seuls les champs optionnels présents donnent une ligne."""
    lines: list[CardLine] = []
    if profile.name:
        lines.append(CardLine("name", f"📛 {profile.name}"))
    if profile.bio:
        lines.append(CardLine("bio", f"📝 {profile.bio}"))
    if profile.location:
        lines.append(CardLine("location", f"📍 {profile.location}"))
    if profile.public_repo_count is not None:
        lines.append(CardLine("repos", f"📦 Repos: {profile.public_repo_count}"))
    if profile.follower_count is not None:
        lines.append(CardLine("followers", f"👥 Followers: {profile.follower_count}"))
    if profile.following_count is not None:
        lines.append(CardLine("following", f"⭐ Following: {profile.following_count}"))

    return CardView(
        key=profile.id,
        avatar_url=profile.avatar_url,
        title=profile.login,
        id_text=f"ID: {profile.id}",
        lines=tuple(lines),
        profile_url=profile.profile_url,
    )


def render(state: ViewState) -> PageView:
    return PageView(
        toggle=ModeToggleView(active=state.mode),
        search_bar=_search_bar(state),
        status_text=_status_text(state),
        error_text=state.error_message,
        loading_text=_loading_text(state),
        cards=tuple(render_card(profile) for profile in state.profiles),
    )
