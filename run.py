"""Entry point for serving the Event Attendance API.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``8000``).  The remaining
configuration, such as ``JWT_SECRET`` and ``DATABASE_URL``, is
documented in ``event_api.app.core.config``.

Usage:
    python run.py
"""
import uvicorn

from event_api.app.core.config import settings


def main() -> None:
    uvicorn.run(
        "event_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
