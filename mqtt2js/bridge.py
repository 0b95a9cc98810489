"""MQTT subscriber feeding the event translator."""
import logging
from typing import Optional

import paho.mqtt.client as mqtt

from mqtt2js.config import BridgeConfig
from mqtt2js.decoder import decode_payload
from mqtt2js.errors import BrokerError, DecodeError, TranslationError
from mqtt2js.translator import EventTranslator

log = logging.getLogger(__name__)


class JoystickBridge:
    """
    Subscribes to one topic and translates every message it receives.

    Messages are handled one at a time in the thread running
    :meth:`loop_forever`. Bad payloads and invalid events are logged and
    dropped; a DeviceWriteError leaves the loop and reaches the caller.
    """

    def __init__(self, config: BridgeConfig, translator: EventTranslator,
                 client: Optional[mqtt.Client] = None):
        self.config = config
        self.translator = translator
        self.error: Optional[BrokerError] = None

        if client is None:
            client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2)
        self.client = client
        self.client.on_connect = self.on_connect
        self.client.on_subscribe = self.on_subscribe
        self.client.on_disconnect = self.on_disconnect
        self.client.on_message = self.on_message

    # ========================================================================
    # CALLBACKS
    # ========================================================================

    def on_connect(self, client, userdata, flags, reason_code, properties=None):
        """Subscribe on every (re)connection so the subscription survives reconnects"""
        if reason_code.is_failure:
            self._fail(f"Connection refused by {self.config.host}:{self.config.port}: {reason_code}")
            return
        log.info("Connected to %s:%d", self.config.host, self.config.port)
        client.subscribe(self.config.topic, qos=self.config.qos)

    def on_subscribe(self, client, userdata, mid, reason_code_list, properties=None):
        for reason_code in reason_code_list:
            if reason_code.is_failure:
                self._fail(f"Subscription to `{self.config.topic}` refused: {reason_code}")
                return
        log.info("Subscribed to `%s`", self.config.topic)

    def on_disconnect(self, client, userdata, disconnect_flags, reason_code, properties=None):
        if reason_code.is_failure:
            log.warning("Disconnected from broker: %s", reason_code)

    def on_message(self, client, userdata, msg):
        self.handle_payload(msg.payload)

    # ========================================================================
    # MESSAGE HANDLING
    # ========================================================================

    def handle_payload(self, payload: bytes) -> bool:
        """Decode and translate one payload, return True if it was applied"""
        log.debug("Received: %r", payload)
        try:
            event = decode_payload(payload)
        except DecodeError as e:
            log.warning("%s", e)
            return False

        log.debug("%d, %d, %d", event.value, event.kind, event.index)
        try:
            self.translator.translate(event)
        except TranslationError as e:
            log.warning("%s", e)
            return False
        return True

    def _fail(self, reason: str):
        log.error(reason)
        self.error = BrokerError(reason)
        self.client.disconnect()

    # ========================================================================
    # LOOP
    # ========================================================================

    def connect(self):
        try:
            self.client.connect(self.config.host, self.config.port, keepalive=self.config.keepalive)
        except OSError as e:
            raise BrokerError(f"cannot connect to {self.config.host}:{self.config.port}: {e}") from e

    def loop_forever(self):
        """Block until the client stops, then raise why it stopped.

        Only returns normally if the client was disconnected on purpose.
        """
        self.client.loop_forever()
        if self.error is not None:
            raise self.error
