"""
libgpiod (v2) character device backend
"""

import errno
import logging

try:
    import gpiod
    from gpiod.line import Direction, Value
    GPIOD_AVAILABLE = True
except ImportError:
    GPIOD_AVAILABLE = False

from ..base import CONSUMER, Chip, Line

logger = logging.getLogger(__name__)


class GpiodLine(Line):
    """Output line backed by its own gpiod.LineRequest"""

    def __init__(self, request, offset: int):
        super().__init__(offset)
        self._request = request

    def get_value(self) -> int:
        value = self._request.get_value(self.offset)
        return 1 if value == Value.ACTIVE else 0

    def set_value(self, value: int):
        self._request.set_value(self.offset, Value.ACTIVE if value else Value.INACTIVE)

    def release(self):
        self._request.release()
        logger.debug(f"Released line {self.offset}")


class GpiodChip(Chip):
    """
    GPIO chip opened through /dev/gpiochipN

    Raises:
        ImportError: gpiod bindings are not installed
        OSError: chip device cannot be opened
    """

    def __init__(self, path: str):
        super().__init__(path)

        if not GPIOD_AVAILABLE:
            raise ImportError("gpiod library not available")

        self._chip = gpiod.Chip(path)
        try:
            info = self._chip.get_info()
        except Exception:
            self._chip.close()
            raise
        self.num_lines = info.num_lines
        logger.info(f"Opened {info.name} ({info.label}) at {path} with {info.num_lines} lines")

    def request_output(self, offset: int, consumer: str = CONSUMER) -> Line:
        if not 0 <= offset < self.num_lines:
            raise OSError(errno.EINVAL, f"offset {offset} out of range for {self.path} ({self.num_lines} lines)")

        request = self._chip.request_lines(
            consumer=consumer,
            config={
                offset: gpiod.LineSettings(
                    direction=Direction.OUTPUT,
                    output_value=Value.INACTIVE,
                ),
            },
        )
        return GpiodLine(request, offset)

    def close(self):
        self._chip.close()
