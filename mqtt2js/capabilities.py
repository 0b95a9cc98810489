"""Capability tables of the virtual joystick.

Each table maps a small joystick index (the ``number`` field of an inbound
message) to the uinput event descriptor ``(event_family, code)`` written to
the device. The virtual device is declared from these same tables, see
:func:`device_events`, so a code can only be written if it was declared.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Tuple

import uinput
from evdev import ecodes

from mqtt2js.errors import InvalidIndex

Event = Tuple[int, int]

# ============================================================================
# AXIS RANGE (signed 16 bit, as reported by the Linux joystick API)
# ============================================================================

AXIS_MIN = -32768
AXIS_MAX = 32767
AXIS_FUZZ = 0
AXIS_FLAT = 0
ABS_RANGE = (AXIS_MIN, AXIS_MAX, AXIS_FUZZ, AXIS_FLAT)


class EventKind(IntEnum):
    """Event families, numbered as JS_EVENT_BUTTON / JS_EVENT_AXIS"""
    BUTTON = 0x01
    AXIS = 0x02

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class CapabilityTable:
    name: str
    events: Tuple[Event, ...]

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def lookup(self, index: int) -> Event:
        """Return the event descriptor at ``index`` or raise InvalidIndex"""
        if not 0 <= index < len(self.events):
            raise InvalidIndex(index, len(self.events))
        return self.events[index]

    def code_name(self, index: int) -> str:
        return event_name(self.lookup(index))


# ============================================================================
# TABLES (Xbox controller layout)
# ============================================================================

BUTTONS = CapabilityTable("button", (
    uinput.BTN_A,
    uinput.BTN_B,
    uinput.BTN_X,
    uinput.BTN_Y,
    uinput.BTN_TL,
    uinput.BTN_TR,
    uinput.BTN_SELECT,
    uinput.BTN_START,
    uinput.BTN_TASK,    # guide
    uinput.BTN_THUMBL,
    uinput.BTN_THUMBR,
))

AXES = CapabilityTable("axis", (
    uinput.ABS_HAT0X,
    uinput.ABS_HAT0Y,
    uinput.ABS_BRAKE,   # left trigger
    uinput.ABS_HAT1X,
    uinput.ABS_HAT1Y,
    uinput.ABS_GAS,     # right trigger
    uinput.ABS_HAT2X,
    uinput.ABS_HAT2Y,
))

TABLES = {
    EventKind.BUTTON: BUTTONS,
    EventKind.AXIS: AXES,
}


def lookup(kind: EventKind, index: int) -> Event:
    return TABLES[kind].lookup(index)


def device_events(buttons: CapabilityTable = BUTTONS,
                  axes: CapabilityTable = AXES) -> Tuple[tuple, ...]:
    """Events to declare when creating the uinput device.

    Buttons first, then axes with their absolute range, both in table order.
    """
    return tuple(buttons) + tuple(axis + ABS_RANGE for axis in axes)


def event_name(event: Event) -> str:
    """Symbolic name of an event descriptor, e.g. ``BTN_A`` or ``ABS_GAS``"""
    family, code = event[:2]
    name = ecodes.bytype.get(family, {}).get(code)
    if name is None:
        return f"{family}:{code}"
    # aliased codes (BTN_A / BTN_GAMEPAD / BTN_SOUTH) come back as a list
    if isinstance(name, (list, tuple)):
        return name[0]
    return name
