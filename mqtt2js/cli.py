"""Command line entry point.

The process never exits successfully once the loop has started: it runs
until it is killed or until the broker or the virtual device fails.
"""
import argparse
import logging
import sys
from typing import List, Optional

from mqtt2js import __version__
from mqtt2js.bridge import JoystickBridge
from mqtt2js.config import BROKER_ADDRESS, BROKER_PORT, TOPIC, BridgeConfig
from mqtt2js.device import DEVICE_NAME, VirtualJoystick
from mqtt2js.errors import Mqtt2jsError
from mqtt2js.translator import EventTranslator

log = logging.getLogger(__name__)

EXIT_FAILURE = 1

LICENSE = """\
Copyright 2020 Cedric Priscal
https://github.com/cepr/mqtt2js

   Licensed under the Apache License, Version 2.0 (the "License");
   you may not use this file except in compliance with the License.
   You may obtain a copy of the License at

       http://www.apache.org/licenses/LICENSE-2.0

   Unless required by applicable law or agreed to in writing, software
   distributed under the License is distributed on an "AS IS" BASIS,
   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
   See the License for the specific language governing permissions and
   limitations under the License."""


def port(text: str) -> int:
    try:
        value = int(text, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid port specified: {text}") from None
    if not 0 < value < 65536:
        raise argparse.ArgumentTypeError(f"Invalid port specified: {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mqtt2js",
        description="Create a virtual joystick controlled by a MQTT topic.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-o", "--host", default=BROKER_ADDRESS,
                        help=f"MQTT server address. Default: {BROKER_ADDRESS}")
    parser.add_argument("-p", "--port", type=port, default=BROKER_PORT,
                        help=f"MQTT server port. Default: {BROKER_PORT}")
    parser.add_argument("-t", "--topic", default=TOPIC,
                        help=f"MQTT topic. Default: {TOPIC}")
    parser.add_argument("-n", "--name", default=DEVICE_NAME,
                        help=f"Virtual joystick name. Default: {DEVICE_NAME}")
    parser.add_argument("-d", "--debug", action="store_true",
                        help="log every received message and device write")
    parser.add_argument("-v", "--version", action="version",
                        version=f"%(prog)s {__version__}\n{LICENSE}",
                        help="display version and exit")
    return parser


def parse_config(argv: Optional[List[str]] = None) -> BridgeConfig:
    args = build_parser().parse_args(argv)
    return BridgeConfig(host=args.host, port=args.port, topic=args.topic,
                        device_name=args.name, debug=args.debug)


def run(config: BridgeConfig) -> None:
    with VirtualJoystick.create(config.device_name) as joystick:
        bridge = JoystickBridge(config, EventTranslator(joystick))
        bridge.connect()
        bridge.loop_forever()


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_config(argv)

    log_level = logging.DEBUG if config.debug else logging.INFO
    logging.basicConfig(format="%(levelname)s: %(message)s", level=log_level)
    log.info("listening for topic `%s` from %s:%d...", config.topic, config.host, config.port)

    try:
        run(config)
        log.error("MQTT loop stopped")
    except Mqtt2jsError as e:
        log.critical("%s, aborting", e)
    except KeyboardInterrupt:
        log.info("Interrupted")
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
