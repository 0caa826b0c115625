"""`python -m portico` — register routes, then serve with uvicorn.

Exits with status 1 when route registration fails, before binding the port.
"""

import logging
import sys

import uvicorn

from portico.config import get_settings
from portico.core.errors import PorticoError
from portico.main import create_app

logger = logging.getLogger("portico")


def main() -> int:
    settings = get_settings()
    try:
        app = create_app(settings)
    except PorticoError as e:
        logger.critical(f"Startup aborted: {e.message}", extra={"error_code": e.code})
        return 1
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
