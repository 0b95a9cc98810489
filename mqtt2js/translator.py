"""Translation of decoded joystick events into virtual device writes."""
import logging
from typing import Dict, Optional

from mqtt2js.capabilities import AXES, BUTTONS, CapabilityTable, EventKind, event_name
from mqtt2js.decoder import InboundEvent
from mqtt2js.errors import IndexOutOfRange, InvalidIndex, UnknownKind

log = logging.getLogger(__name__)


class EventTranslator:
    """
    Replays InboundEvents on a virtual device sink.

    The sink is anything with ``write(event, value)`` and ``sync()``, see
    :class:`mqtt2js.device.VirtualJoystick`. The translator keeps no state
    between calls: every valid event produces exactly one data write followed
    by exactly one sync, every invalid one produces none.

    Errors:
    - UnknownKind / IndexOutOfRange: the event is rejected, nothing is written
    - DeviceWriteError from the sink: propagated untouched, it is fatal
    """

    def __init__(self, sink,
                 buttons: CapabilityTable = BUTTONS,
                 axes: CapabilityTable = AXES):
        self.sink = sink
        self.tables: Dict[EventKind, CapabilityTable] = {
            EventKind.BUTTON: buttons,
            EventKind.AXIS: axes,
        }

    def _kind(self, kind: int) -> Optional[EventKind]:
        try:
            return EventKind(kind)
        except ValueError:
            return None

    def translate(self, event: InboundEvent) -> None:
        kind = self._kind(event.kind)
        if kind is None:
            raise UnknownKind(event.kind)

        try:
            target = self.tables[kind].lookup(event.index)
        except InvalidIndex as e:
            raise IndexOutOfRange(kind, e.index, e.bound) from None

        if log.isEnabledFor(logging.DEBUG):
            log.debug("%s %d -> %s = %d", kind.label, event.index, event_name(target), event.value)
        self.sink.write(target, event.value)
        self.sink.sync()
