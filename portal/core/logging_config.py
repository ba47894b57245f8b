"""
Logging setup. Modules log through logging.getLogger(__name__).
"""

import logging

from portal.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure root logging once for the whole process."""
    settings = get_settings()
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT
    )
