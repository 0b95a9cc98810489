"""Default settings, overridable from the command line."""
from dataclasses import dataclass

from mqtt2js.device import DEVICE_NAME

# ============================================================================
# MQTT CONFIGURATION
# ============================================================================
BROKER_ADDRESS = "localhost"
BROKER_PORT = 1883
TOPIC = "/joystick"
KEEPALIVE = 60
QOS = 2


@dataclass
class BridgeConfig:
    host: str = BROKER_ADDRESS
    port: int = BROKER_PORT
    topic: str = TOPIC
    device_name: str = DEVICE_NAME
    keepalive: int = KEEPALIVE
    qos: int = QOS
    debug: bool = False
