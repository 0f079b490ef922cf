"""Runtime helper for launching the product catalog API."""

import uvicorn

from app.core.config import get_settings


def run() -> None:  # pragma: no cover - exercised in deployment
    settings = get_settings()
    uvicorn.run("app.app:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    run()
