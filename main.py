"""Point d'entrée de l'application ProfileBrowser."""

from __future__ import annotations

from profilebrowser.config import load_config
from profilebrowser.logging_setup import configure_logging
from profilebrowser.services import GitHubService
from profilebrowser.ui.app import MainWindow


def main() -> None:
    """Initialise les dépendances puis lance l'interface Tkinter."""
    config = load_config()
    configure_logging(config.log_level)
    service = GitHubService(config)
    app = MainWindow(service=service, config=config)
    app.run()


if __name__ == "__main__":
    main()
