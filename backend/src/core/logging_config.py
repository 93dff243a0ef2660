"""Logging setup shared by the API process and maintenance scripts."""
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(__name__).debug("Logging configured at level %s", level)
