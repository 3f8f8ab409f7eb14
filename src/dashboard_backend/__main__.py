"""Run the API server with the configured host and port."""

from __future__ import annotations

import uvicorn

from .configuration import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "dashboard_backend.main:app",
        host=str(settings.server.host),
        port=int(settings.server.port),
        log_level=str(settings.logging.level).lower(),
    )


if __name__ == "__main__":
    main()
