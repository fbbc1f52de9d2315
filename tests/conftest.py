import errno
import threading
import time

import pytest

import app as app_module
from pins import Line, PinBinding, PinRegistry, bind_lines
from pins.lines import SimulatedLine

PINS = [17, 27, 22, 23]
NAMES = ['relay', 'led', 'relay', 'fan']


class FaultyLine(SimulatedLine):
    """Line whose hardware calls always fail"""

    def get_value(self):
        raise OSError(errno.EIO, 'read failed')

    def set_value(self, value):
        raise OSError(errno.EIO, 'write failed')


class ProbeLine(Line):
    """Records how many hardware calls overlap across all probe lines"""

    def __init__(self, offset, probe):
        super().__init__(offset)
        self.probe = probe
        self.value = 0

    def _enter(self):
        with self.probe['lock']:
            self.probe['active'] += 1
            self.probe['max_active'] = max(self.probe['max_active'], self.probe['active'])
        time.sleep(0.001)

    def _leave(self):
        with self.probe['lock']:
            self.probe['active'] -= 1

    def get_value(self):
        self._enter()
        try:
            return self.value
        finally:
            self._leave()

    def set_value(self, value):
        self._enter()
        try:
            self.value = value
        finally:
            self._leave()


@pytest.fixture
def probe():
    return {'lock': threading.Lock(), 'active': 0, 'max_active': 0}


@pytest.fixture
def chip_path(request):
    # Simulated claims are process-wide, keep every test on its own chip
    return f"/dev/gpiochip-{request.node.name}"


@pytest.fixture
def registry(chip_path):
    registry = bind_lines(chip_path, PINS, NAMES, simulate=True)
    yield registry
    registry.close()


@pytest.fixture
def faulty_registry():
    bindings = [
        PinBinding(0, 'good', SimulatedLine(5)),
        PinBinding(1, 'bad', FaultyLine(6)),
    ]
    return PinRegistry(bindings)


def make_client(registry):
    app_module.init_registry(registry)
    app_module.app.config['TESTING'] = True
    return app_module.app.test_client()


@pytest.fixture
def client(registry):
    yield make_client(registry)
    app_module.init_registry(None)


@pytest.fixture
def faulty_client(faulty_registry):
    yield make_client(faulty_registry)
    app_module.init_registry(None)


@pytest.fixture
def probe_registry(probe):
    bindings = [PinBinding(i, f"pin{i}", ProbeLine(i, probe)) for i in range(8)]
    return PinRegistry(bindings)
