"""
Configuration loading for the GPIO API

Accepts TOML (.toml) or YAML (.yaml/.yml) files shaped as:

    [main]
    debug = true
    port = 8080

    [gpio]
    chip = "/dev/gpiochip0"
    pins = [17, 27]
    names = ["relay", "led"]
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from typing import List

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = ('.yaml', '.yml')


@dataclass
class MainConfig:
    debug: bool = False
    port: int = 8080
    simulate: bool = False


@dataclass
class GpioConfig:
    chip: str
    pins: List[int] = field(default_factory=list)
    names: List[str] = field(default_factory=list)


@dataclass
class Config:
    main: MainConfig
    gpio: GpioConfig


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _table(raw: dict, key: str) -> dict:
    section = raw.get(key)
    if not isinstance(section, dict):
        raise ConfigError(f"missing [{key}] section")
    return section


def parse_config(raw: dict) -> Config:
    """
    Validate a parsed configuration mapping

    Args:
        raw: dict as produced by tomllib or yaml.safe_load

    Returns:
        Config

    Raises:
        ConfigError: a field is missing, mistyped or out of range
    """
    if not isinstance(raw, dict):
        raise ConfigError("configuration must be a mapping")

    main = _table(raw, 'main')
    gpio = _table(raw, 'gpio')

    debug = main.get('debug', False)
    simulate = main.get('simulate', False)
    port = main.get('port')
    for key, value in (('debug', debug), ('simulate', simulate)):
        if not isinstance(value, bool):
            raise ConfigError(f"main.{key} must be true or false")
    if not _is_int(port) or not 0 <= port <= 65535:
        raise ConfigError(f"main.port must be an integer between 0 and 65535, got {port!r}")

    chip = gpio.get('chip')
    if not isinstance(chip, str) or not chip:
        raise ConfigError("gpio.chip must be a non-empty string")

    pins = gpio.get('pins', [])
    names = gpio.get('names', [])
    if not isinstance(pins, list) or not all(_is_int(p) and p >= 0 for p in pins):
        raise ConfigError("gpio.pins must be a list of non-negative integers")
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        raise ConfigError("gpio.names must be a list of strings")
    if len(pins) != len(names):
        raise ConfigError(f"gpio.pins has {len(pins)} entries but gpio.names has {len(names)}")

    return Config(
        main=MainConfig(debug=debug, port=port, simulate=simulate),
        gpio=GpioConfig(chip=chip, pins=pins, names=names),
    )


def load_config(filepath: str) -> Config:
    """
    Read and validate a configuration file

    Raises:
        ConfigError: file is missing, unreadable or invalid
    """
    if not os.path.exists(filepath):
        raise ConfigError(f"configuration file not found: {filepath}")

    try:
        if filepath.endswith(YAML_EXTENSIONS):
            with open(filepath, 'r') as f:
                raw = yaml.safe_load(f)
        else:
            with open(filepath, 'rb') as f:
                raw = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"error reading config: {e}") from e
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"error parsing config: {e}") from e

    config = parse_config(raw)
    logger.info(f"Loaded {len(config.gpio.pins)} pins from {filepath}")
    return config
