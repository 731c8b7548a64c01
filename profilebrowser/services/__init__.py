from profilebrowser.services.github_client import (
    FetchError,
    GitHubService,
    GitHubServiceError,
    TransportError,
    UserNotFoundError,
)

__all__ = [
    "FetchError",
    "GitHubService",
    "GitHubServiceError",
    "TransportError",
    "UserNotFoundError",
]
