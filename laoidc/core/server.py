"""Process entrypoint: configure logging, build the app, and serve it."""

import logging
import sys

import uvicorn

from laoidc.core.app import create_app
from laoidc.core.errors import StartupFatalError
from laoidc.core.settings import ProviderSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main() -> None:
    """Run the provider with uvicorn."""
    settings = ProviderSettings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    try:
        app = create_app(settings)
    except StartupFatalError as exc:
        logger.critical("Provider cannot start: %s", exc.message)
        sys.exit(1)

    logger.info(
        "Serving %s on %s:%d", settings.issuer, settings.address, settings.port
    )
    uvicorn.run(
        app,
        host=settings.address,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
