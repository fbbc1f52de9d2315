"""
Optional console trace of pin writes
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class DebugLogger:
    """
    Reports writes when debug output is enabled in the config

    Does nothing when disabled.
    """

    def __init__(self, enabled: bool = False, log: Optional[logging.Logger] = None):
        self.enabled = enabled
        self.log = log or logger

    def write_ok(self, offset: int, value: int):
        if self.enabled:
            self.log.info(f"pin {offset} set to {value}")

    def write_error(self, error: Exception):
        if self.enabled:
            self.log.error(f"error: {error}")
