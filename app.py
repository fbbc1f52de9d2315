from flask import Flask, Response, request
import argparse
import logging
import signal
import sys

from pins import GpioApiError, PinRegistry, bind_lines, load_config

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.logger.disabled = True  # Disable Flask's request logging

# Cap form submissions; larger bodies get a 413
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024

# Bound lines, set once at startup by init_registry()
pin_registry = None

INVALID_GPIO = 'invalid GPIO'
INVALID_PIN = 'invalid GPIO pin'
INVALID_NAME = 'invalid GPIO name'
INVALID_STATE = 'invalid state'
OK = 'OK'


def init_registry(registry: PinRegistry):
    """Install the registry the routes serve"""
    global pin_registry
    pin_registry = registry


def cleanup():
    """Release GPIO lines on exit"""
    global pin_registry

    if pin_registry is not None:
        pin_registry.close()
        pin_registry = None


def text(body):
    return Response(body, mimetype='text/plain')


def parse_index(value):
    """Parse a non-negative decimal integer, None if it isn't one"""
    if value is None or not value.isascii() or not value.isdigit():
        return None
    return int(value)


def parse_state(value):
    """Parse a pin state, only 0 and 1 are accepted"""
    state = parse_index(value)
    if state not in (0, 1):
        return None
    return state


@app.route('/get/<index>', methods=['GET'])
def get_pin(index):
    """Read a pin by position"""
    index = parse_index(index)
    if index is None:
        return text(INVALID_GPIO)

    value = pin_registry.read_index(index)
    if value is None:
        return text(INVALID_GPIO)
    return text(value)


@app.route('/set', methods=['POST'])
def set_pin():
    """Set a pin by position"""
    index = parse_index(request.form.get('pin'))
    if index is None or pin_registry.get(index) is None:
        return text(INVALID_PIN)

    state = parse_state(request.form.get('state'))
    if state is None:
        return text(INVALID_STATE)

    pin_registry.write_index(index, state)
    return text(OK)


@app.route('/name/get/<name>', methods=['GET'])
def get_pin_by_name(name):
    """Read a pin by name; with aliased names the last pin wins"""
    value = pin_registry.read_name(name)
    if value is None:
        return text(INVALID_NAME)
    return text(value)


@app.route('/name/set', methods=['POST'])
def set_pin_by_name():
    """Set every pin sharing a name"""
    name = request.form.get('name')
    if name is None or not pin_registry.get_by_name(name):
        return text(INVALID_NAME)

    state = parse_state(request.form.get('state'))
    if state is None:
        return text(INVALID_STATE)

    pin_registry.write_name(name, state)
    return text(OK)


@app.route('/gpio', methods=['GET'])
def get_all_pins():
    """Report every pin in configured order"""
    out = ''
    for pin in pin_registry.dump():
        out += f"pin: {pin['offset']} | name: {pin['name']} | state: {pin['state']}\n"
    return text(out)


def port_number(value):
    """argparse type for a TCP port"""
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be between 0 and 65535, got {port}")
    return port


def handle_sigterm(signum, frame):
    """Turn SIGTERM into a normal exit so the lines get released"""
    sys.exit(0)


def main(argv=None):
    # Parse command line arguments
    parser = argparse.ArgumentParser(description='HTTP control of Raspberry Pi GPIO lines')
    parser.add_argument('config', help='Configuration file (.toml, .yaml or .yml)')
    parser.add_argument('--port', type=port_number,
                        help='Port to run the web server on (overrides config)')
    parser.add_argument('--debug', action='store_true', default=None,
                        help='Log every pin write (turns debug on only; use debug = false in the config to turn it off)')
    parser.add_argument('--simulate', action='store_true', default=None,
                        help='Use in-memory lines instead of GPIO hardware')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    # Disable werkzeug logging
    logging.getLogger('werkzeug').setLevel(logging.ERROR)

    try:
        config = load_config(args.config)
        if args.port is not None:
            config.main.port = args.port
        if args.debug is not None:
            config.main.debug = args.debug
        if args.simulate is not None:
            config.main.simulate = args.simulate

        registry = bind_lines(
            config.gpio.chip,
            config.gpio.pins,
            config.gpio.names,
            debug=config.main.debug,
            simulate=config.main.simulate,
        )
    except GpioApiError as e:
        logger.error(str(e))
        sys.exit(1)

    init_registry(registry)
    signal.signal(signal.SIGTERM, handle_sigterm)

    try:
        print("\n" + "="*70)
        print("  GPIO API")
        print(f"  http://0.0.0.0:{config.main.port}")
        print(f"  Chip: {config.gpio.chip}{' (simulated)' if config.main.simulate else ''}")
        for binding in registry:
            print(f"  [{binding.index}] pin {binding.offset}: {binding.name}")
        print(f"  Debug: {'on' if config.main.debug else 'off'}")
        print("="*70 + "\n")
        app.run(host='0.0.0.0', port=config.main.port, debug=False, use_reloader=False, threaded=True)
    except KeyboardInterrupt:
        print("\n\nShutting down...")
    finally:
        cleanup()


if __name__ == '__main__':
    main()
