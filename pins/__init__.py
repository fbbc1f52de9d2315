"""
Pin registry for gpio-api
Binds configured GPIO lines and serialises access to them
"""

from .base import CONSUMER, Chip, Line, PinBinding
from .binder import bind_lines, open_chip
from .config import Config, load_config
from .debug import DebugLogger
from .errors import ConfigError, GpioApiError, LineBindError
from .registry import READ_ERROR, PinRegistry

__all__ = [
    'CONSUMER', 'Chip', 'Line', 'PinBinding',
    'bind_lines', 'open_chip',
    'Config', 'load_config',
    'DebugLogger',
    'ConfigError', 'GpioApiError', 'LineBindError',
    'READ_ERROR', 'PinRegistry',
]
