"""neo-access main entry point."""

import uvicorn
from loguru import logger

from .app import create_app
from .config.settings import get_settings


def main() -> None:
    """Run the application."""
    settings = get_settings()
    app = create_app(settings)

    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
        access_log=True,
    )


if __name__ == "__main__":
    main()
