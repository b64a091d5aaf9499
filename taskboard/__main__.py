# taskboard/__main__.py
"""Run the API with uvicorn: ``python -m taskboard``."""

import logging

import uvicorn

from .config import get_settings
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir)
    logger.info("Starting %s on %s:%s data=%s", settings.app_name, settings.host, settings.port, settings.data_path)
    uvicorn.run(
        "taskboard.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
