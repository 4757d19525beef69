"""Uvicorn server runner."""

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from boutique.app import App
from boutique.config import Config
from boutique.web.server import create_fastapi_app

ACCESS_LOG_FORMAT = '%(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s'


def run_server(app: App, config: Config) -> None:
    """Serve the API; structlog handles application logs, uvicorn keeps its own access log."""
    log_config = LOGGING_CONFIG.copy()
    log_config["formatters"]["access"]["fmt"] = ACCESS_LOG_FORMAT
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    uvicorn.run(
        create_fastapi_app(app, config),
        host=config.host,
        port=config.port,
        log_config=log_config,
        log_level="debug" if config.debug else "info",
        # Local upload URLs are built from the request host, honour X-Forwarded-* behind a proxy
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
