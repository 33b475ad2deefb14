import logging

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging() -> None:
    """Configures the root logger once, at application startup."""
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    # httpx logs every request at INFO; translations make that very noisy
    logging.getLogger("httpx").setLevel(logging.WARNING)
