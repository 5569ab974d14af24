"""
Run the todo API with uvicorn.

Host and port come from the HOST and PORT environment variables
(defaults ``0.0.0.0`` and ``3000``).

Usage:
    python -m todo_api
"""
import logging

from uvicorn import Config, Server

from .logging_config import setup_logging
from .settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Configure logging and serve the app until interrupted."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Server running on port %d", settings.port)
    config = Config(
        app="todo_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    Server(config).run()


if __name__ == "__main__":
    main()
