"""
Exceptions raised while starting up the GPIO API
"""


class GpioApiError(Exception):
    """Base class for startup failures"""


class ConfigError(GpioApiError, ValueError):
    """Configuration file is missing, unreadable or malformed"""


class LineBindError(GpioApiError, RuntimeError):
    """GPIO chip could not be opened or a line could not be claimed"""
