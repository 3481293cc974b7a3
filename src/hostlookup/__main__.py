"""Entry point for running the application directly."""

import uvicorn

from hostlookup.core.config import get_settings


def main():
    """Run the HTTP service on the configured address."""
    settings = get_settings()

    uvicorn.run(
        "hostlookup.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.server_log_level.lower(),
    )


if __name__ == "__main__":
    main()
