"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from burnit.config import Settings


def main() -> None:
    """Run the food log API on the configured host and port."""
    settings = Settings()
    uvicorn.run(
        "burnit.api.asgi:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
