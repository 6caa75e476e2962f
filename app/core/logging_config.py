"""
Logging setup - one call from the app lifespan configures the root logger.

Modules log through `logging.getLogger(__name__)`.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once. Safe to call repeatedly."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_job_portal", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._job_portal = True
        root.addHandler(handler)
