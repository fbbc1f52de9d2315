"""
Base classes for claimed GPIO lines and their bindings
"""

import logging

logger = logging.getLogger(__name__)

# Consumer label shown by gpioinfo for every line we hold
CONSUMER = 'gpio-api'


class Line:
    """
    Base class for one claimed output line

    Subclasses wrap a backend handle (libgpiod request, simulator slot).
    Hardware failures surface as OSError.
    """

    def __init__(self, offset: int):
        self.offset = offset

    def get_value(self) -> int:
        """
        Read the current line level

        Returns:
            0 or 1
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement get_value()")

    def set_value(self, value: int):
        """
        Drive the line

        Args:
            value: 0 (low) or 1 (high)
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement set_value()")

    def release(self):
        """Give the line back to the kernel"""
        pass


class PinBinding:
    """
    A configured pin paired with its claimed line and symbolic name

    The line handle is only touched by PinRegistry, under its lock.
    """

    def __init__(self, index: int, name: str, line: Line):
        self.index = index
        self.name = name
        self._line = line

    @property
    def offset(self) -> int:
        return self._line.offset

    def get_metadata(self) -> dict:
        return {
            'index': self.index,
            'offset': self.offset,
            'name': self.name,
        }

    def __repr__(self):
        return f"PinBinding(index={self.index}, offset={self.offset}, name={self.name!r})"


class Chip:
    """
    Base class for a GPIO chip that hands out exclusive output lines

    Usable as a context manager; closing the chip does not release lines
    already requested from it.
    """

    def __init__(self, path: str):
        self.path = path

    def request_output(self, offset: int, consumer: str = CONSUMER) -> Line:
        """
        Claim a line for output, driven low

        Args:
            offset: Line offset on this chip
            consumer: Label recorded by the kernel for the claim

        Returns:
            Claimed Line

        Raises:
            OSError: Line is busy, out of range or not accessible
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement request_output()")

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
