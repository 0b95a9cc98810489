"""Virtual joystick backed by the kernel uinput module."""
import logging

import uinput

from mqtt2js.capabilities import AXES, BUTTONS, CapabilityTable, device_events, event_name
from mqtt2js.errors import DeviceSetupError, DeviceWriteError

log = logging.getLogger(__name__)

DEVICE_NAME = "mqtt2js virtual joystick"


class VirtualJoystick:
    """
    Sink for translated events.

    ``write`` emits one event without synchronization, ``sync`` emits the
    SYN_REPORT that makes the preceding writes visible as one update.
    """

    def __init__(self, device):
        self._device = device

    @classmethod
    def create(cls, name: str = DEVICE_NAME,
               buttons: CapabilityTable = BUTTONS,
               axes: CapabilityTable = AXES) -> "VirtualJoystick":
        """Register a uinput device declaring every code of both tables"""
        events = device_events(buttons, axes)
        try:
            device = uinput.Device(events, name=name)
        except OSError as e:
            raise DeviceSetupError(f"cannot create virtual joystick `{name}`: {e}") from e
        log.info("Virtual joystick `%s` created (%d buttons, %d axes)", name, len(buttons), len(axes))
        return cls(device)

    def write(self, event, value: int) -> None:
        try:
            self._device.emit(event, value, syn=False)
        except OSError as e:
            raise DeviceWriteError(f"write {event_name(event)}={value} failed: {e}") from e

    def sync(self) -> None:
        try:
            self._device.syn()
        except OSError as e:
            raise DeviceWriteError(f"SYN_REPORT failed: {e}") from e

    def close(self) -> None:
        device = self._device
        self._device = None
        if device is not None:
            device.destroy()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
