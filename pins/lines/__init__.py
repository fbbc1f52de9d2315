"""
GPIO line backends
"""

from .gpiod_line import GPIOD_AVAILABLE, GpiodChip, GpiodLine
from .simulated import SimulatedChip, SimulatedLine

__all__ = ['GPIOD_AVAILABLE', 'GpiodChip', 'GpiodLine', 'SimulatedChip', 'SimulatedLine']
