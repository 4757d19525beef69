"""Application entry point for the Boutique backend server."""

from boutique.app import App
from boutique.config import Config
from boutique.logging import setup_logging
from boutique.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
