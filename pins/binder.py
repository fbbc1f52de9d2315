"""
Claims the configured GPIO lines at startup
"""

import logging
from typing import List, Sequence

from .base import CONSUMER, Chip, Line, PinBinding
from .debug import DebugLogger
from .errors import ConfigError, LineBindError
from .lines import GpiodChip, SimulatedChip
from .registry import PinRegistry

logger = logging.getLogger(__name__)


def open_chip(path: str, simulate: bool = False) -> Chip:
    """
    Open a GPIO chip

    Args:
        path: Chip device, e.g. /dev/gpiochip0
        simulate: Use in-memory lines instead of hardware

    Raises:
        LineBindError: chip could not be opened
    """
    if simulate:
        return SimulatedChip(path)

    try:
        return GpiodChip(path)
    except (ImportError, OSError, ValueError) as e:
        raise LineBindError(f"error opening GPIO chip {path}: {e}") from e


def bind_lines(chip_path: str, pins: Sequence[int], names: Sequence[str],
               debug: bool = False, simulate: bool = False) -> PinRegistry:
    """
    Claim every configured pin as an output driven low

    Either all pins are bound or none are: on failure, lines claimed so
    far are released before the error propagates.

    Args:
        chip_path: GPIO chip device
        pins: Line offsets in configured order
        names: Symbolic name for each pin
        debug: Enable the write trace
        simulate: Use in-memory lines instead of hardware

    Returns:
        PinRegistry with one binding per pin, index 0 first

    Raises:
        ConfigError: pins and names differ in length
        LineBindError: chip could not be opened or a line could not be claimed
    """
    if len(pins) != len(names):
        raise ConfigError(f"{len(pins)} pins but {len(names)} names configured")

    claimed: List[Line] = []
    bindings = []
    with open_chip(chip_path, simulate) as chip:
        for index, (pin, name) in enumerate(zip(pins, names)):
            try:
                line = chip.request_output(pin, CONSUMER)
            except (OSError, ValueError) as e:
                for claimed_line in claimed:
                    claimed_line.release()
                raise LineBindError(f"error opening GPIO pin {pin}: {e}") from e

            claimed.append(line)
            bindings.append(PinBinding(index, name, line))
            logger.debug(f"Bound pin {pin} as '{name}' (index {index})")

    logger.info(f"Bound {len(bindings)} GPIO lines on {chip_path}")
    return PinRegistry(bindings, DebugLogger(debug))
