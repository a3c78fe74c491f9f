"""
Run the API with uvicorn on HOST:PORT from settings:

  python -m app.serve
"""

import logging
import sys

import uvicorn

from app.core.config import get_settings


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    logging.getLogger(__name__).info(
        "Server is listening on port %s (env=%s)", settings.PORT, settings.APP_ENV
    )
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.APP_ENV == "dev" and settings.DEBUG,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
