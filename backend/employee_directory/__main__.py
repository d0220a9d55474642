"""Entry point: python -m employee_directory"""

from __future__ import annotations

import logging

import uvicorn

from employee_directory.core.config import settings

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main() -> None:
    _setup_logging(settings.LOG_LEVEL)
    logger.info("Employee API starting on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(
        "employee_directory.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
