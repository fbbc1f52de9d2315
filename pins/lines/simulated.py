"""
In-memory GPIO chip for running without hardware

Claims follow the kernel's rules: one owner per line and offsets must
exist on the chip.
"""

import errno
import logging
import threading
from typing import Dict, Set

from ..base import CONSUMER, Chip, Line

logger = logging.getLogger(__name__)

# Same line count as the Broadcom chip on a Pi 3/4
DEFAULT_NUM_LINES = 54

# chip path -> claimed offsets, shared by every SimulatedChip in the process
_claimed: Dict[str, Set[int]] = {}
_claimed_lock = threading.Lock()


class SimulatedLine(Line):
    """Line whose level lives in memory"""

    def __init__(self, offset: int, chip_path: str = 'sim', value: int = 0):
        super().__init__(offset)
        self.chip_path = chip_path
        self.value = value
        self.released = False

    def get_value(self) -> int:
        if self.released:
            raise OSError(errno.EBADF, f"line {self.offset} has been released")
        return self.value

    def set_value(self, value: int):
        if self.released:
            raise OSError(errno.EBADF, f"line {self.offset} has been released")
        self.value = 1 if value else 0

    def release(self):
        if self.released:
            return
        self.released = True
        with _claimed_lock:
            _claimed.get(self.chip_path, set()).discard(self.offset)
        logger.debug(f"Released simulated line {self.chip_path}:{self.offset}")


class SimulatedChip(Chip):
    """Chip with num_lines in-memory lines"""

    def __init__(self, path: str, num_lines: int = DEFAULT_NUM_LINES):
        super().__init__(path)
        self.num_lines = num_lines
        logger.info(f"Simulating {path} with {num_lines} lines")

    def request_output(self, offset: int, consumer: str = CONSUMER) -> Line:
        if not 0 <= offset < self.num_lines:
            raise OSError(errno.EINVAL, f"offset {offset} out of range for {self.path}")

        with _claimed_lock:
            claimed = _claimed.setdefault(self.path, set())
            if offset in claimed:
                raise OSError(errno.EBUSY, f"line {offset} on {self.path} is busy")
            claimed.add(offset)

        return SimulatedLine(offset, self.path)
