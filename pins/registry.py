"""
Registry of bound GPIO lines shared by all request threads
"""

import logging
import threading
from typing import Iterator, List, Optional

from .base import PinBinding
from .debug import DebugLogger

logger = logging.getLogger(__name__)

# Sentinel returned instead of a level when a read fails
READ_ERROR = 'err'


class PinRegistry:
    """
    Ordered, fixed collection of pin bindings

    Every hardware access happens under one lock covering the whole
    collection, so reads and writes from concurrent requests never
    interleave. The lock is re-entrant: the composite operations hold it
    across all the bindings they touch.
    """

    def __init__(self, bindings: List[PinBinding], debug: Optional[DebugLogger] = None):
        self._bindings = list(bindings)
        self._lock = threading.RLock()
        self._closed = False
        self.debug = debug or DebugLogger()

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[PinBinding]:
        return iter(self._bindings)

    def get(self, index: int) -> Optional[PinBinding]:
        """
        Get the binding at a position

        Args:
            index: 0-based position in configured order

        Returns:
            PinBinding or None if index is out of range
        """
        if 0 <= index < len(self._bindings):
            return self._bindings[index]
        return None

    def get_by_name(self, name: str) -> List[PinBinding]:
        """
        Get every binding configured with a name

        Args:
            name: Symbolic pin name

        Returns:
            Matching bindings in registry order (empty if none match)
        """
        return [binding for binding in self._bindings if binding.name == name]

    def read_value(self, binding: PinBinding) -> str:
        """
        Read the hardware level of a binding

        Returns:
            '0', '1', or 'err' if the read failed
        """
        with self._lock:
            try:
                value = binding._line.get_value()
            except OSError as e:
                logger.warning(f"Read of pin {binding.offset} failed: {e}")
                return READ_ERROR

        if value in (0, 1):
            return str(value)
        logger.warning(f"Read of pin {binding.offset} returned {value!r}")
        return READ_ERROR

    def write_value(self, binding: PinBinding, value: int) -> bool:
        """
        Drive the hardware level of a binding

        Failures are reported to the debug log only.

        Returns:
            True if the write reached the line
        """
        with self._lock:
            try:
                binding._line.set_value(value)
            except OSError as e:
                self.debug.write_error(e)
                return False
            self.debug.write_ok(binding.offset, value)
            return True

    def read_index(self, index: int) -> Optional[str]:
        """Read the pin at index, None if there is no such pin"""
        with self._lock:
            binding = self.get(index)
            if binding is None:
                return None
            return self.read_value(binding)

    def write_index(self, index: int, value: int) -> bool:
        """
        Write the pin at index

        Returns:
            False if there is no such pin
        """
        with self._lock:
            binding = self.get(index)
            if binding is None:
                return False
            self.write_value(binding, value)
            return True

    def read_name(self, name: str) -> Optional[str]:
        """
        Read a named pin

        When several pins share the name, the last one in registry order
        is reported.

        Returns:
            Value string or None if no pin has that name
        """
        with self._lock:
            result = None
            for binding in self.get_by_name(name):
                result = self.read_value(binding)
            return result

    def write_name(self, name: str, value: int) -> bool:
        """
        Write every pin sharing a name

        Returns:
            False if no pin has that name
        """
        with self._lock:
            matches = self.get_by_name(name)
            for binding in matches:
                self.write_value(binding, value)
            return bool(matches)

    def dump(self) -> List[dict]:
        """
        Snapshot of every pin in registry order

        Returns:
            list of dicts with index, offset, name and state keys
        """
        with self._lock:
            return [
                dict(binding.get_metadata(), state=self.read_value(binding))
                for binding in self._bindings
            ]

    def close(self):
        """Release every line; safe to call more than once"""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            for binding in self._bindings:
                try:
                    binding._line.release()
                except OSError as e:
                    logger.error(f"Failed to release pin {binding.offset}: {e}")
            logger.info(f"Released {len(self._bindings)} GPIO lines")
