from pathlib import Path

import pytest

from pins import ConfigError, load_config
from pins.config import parse_config

CONFIG_DIR = Path(__file__).parent.parent / 'configs'

VALID_TOML = """
[main]
debug = true
port = 8080

[gpio]
chip = "/dev/gpiochip0"
pins = [17, 27]
names = ["relay", "led"]
"""


def raw_config(**gpio):
    config = {
        'main': {'debug': False, 'port': 8080},
        'gpio': {'chip': '/dev/gpiochip0', 'pins': [17], 'names': ['relay']},
    }
    config['gpio'].update(gpio)
    return config


def test_load_toml(tmp_path):
    path = tmp_path / 'gpio.toml'
    path.write_text(VALID_TOML)
    config = load_config(str(path))
    assert config.main.debug is True
    assert config.main.port == 8080
    assert config.main.simulate is False
    assert config.gpio.chip == '/dev/gpiochip0'
    assert config.gpio.pins == [17, 27]
    assert config.gpio.names == ['relay', 'led']


def test_load_yaml(tmp_path):
    path = tmp_path / 'gpio.yml'
    path.write_text(
        "main:\n  debug: false\n  port: 5000\n  simulate: true\n"
        "gpio:\n  chip: gpiochip1\n  pins: [4]\n  names: [fan]\n"
    )
    config = load_config(str(path))
    assert config.main.port == 5000
    assert config.main.simulate is True
    assert config.gpio.names == ['fan']


@pytest.mark.parametrize('filename', ['example.toml', 'example.yaml'])
def test_shipped_examples_load(filename):
    config = load_config(str(CONFIG_DIR / filename))
    assert len(config.gpio.pins) == len(config.gpio.names)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match='not found'):
        load_config(str(tmp_path / 'nope.toml'))


def test_malformed_toml(tmp_path):
    path = tmp_path / 'bad.toml'
    path.write_text('[main\nport = ')
    with pytest.raises(ConfigError, match='error parsing config'):
        load_config(str(path))


def test_mismatched_lengths():
    with pytest.raises(ConfigError, match='gpio.names'):
        parse_config(raw_config(pins=[1, 2, 3], names=['a', 'b']))


@pytest.mark.parametrize('pins', [[-1], ['17'], [True], 17])
def test_bad_pins(pins):
    with pytest.raises(ConfigError, match='gpio.pins'):
        parse_config(raw_config(pins=pins, names=['a']))


@pytest.mark.parametrize('port', [None, -1, 70000, '8080', True])
def test_bad_port(port):
    raw = raw_config()
    raw['main']['port'] = port
    with pytest.raises(ConfigError, match='main.port'):
        parse_config(raw)


def test_debug_must_be_bool():
    raw = raw_config()
    raw['main']['debug'] = 'yes'
    with pytest.raises(ConfigError, match='main.debug'):
        parse_config(raw)


@pytest.mark.parametrize('section', ['main', 'gpio'])
def test_missing_section(section):
    raw = raw_config()
    del raw[section]
    with pytest.raises(ConfigError, match=section):
        parse_config(raw)


def test_empty_chip_rejected():
    with pytest.raises(ConfigError, match='gpio.chip'):
        parse_config(raw_config(chip=''))


def test_names_may_repeat():
    config = parse_config(raw_config(pins=[1, 2], names=['relay', 'relay']))
    assert config.gpio.names == ['relay', 'relay']
