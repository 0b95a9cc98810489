import pytest
import uinput

from mqtt2js.capabilities import AXES, BUTTONS, EventKind
from mqtt2js.decoder import InboundEvent
from mqtt2js.errors import DeviceWriteError, IndexOutOfRange, TranslationError, UnknownKind
from mqtt2js.translator import EventTranslator

# ==============================================================
# Fakes
# ==============================================================

class RecordingSink:
    """Records writes and syncs in call order"""

    def __init__(self):
        self.calls = []

    def write(self, event, value):
        self.calls.append(("write", event, value))

    def sync(self):
        self.calls.append(("sync",))


class BrokenSink(RecordingSink):
    def write(self, event, value):
        raise DeviceWriteError("write failed: No such device")


def translate(kind, index, value, sink=None):
    sink = sink if sink is not None else RecordingSink()
    EventTranslator(sink).translate(InboundEvent(kind=kind, index=index, value=value))
    return sink.calls

# ==============================================================
# Valid events
# ==============================================================

@pytest.mark.parametrize("kind, table", [(EventKind.BUTTON, BUTTONS), (EventKind.AXIS, AXES)])
def test_every_valid_index_writes_then_syncs(kind, table):
    for index in range(len(table)):
        calls = translate(int(kind), index, 1)
        assert calls == [("write", table.lookup(index), 1), ("sync",)]


def test_scenario_button_press():
    calls = translate(1, 0, 1)
    assert calls == [("write", uinput.BTN_A, 1), ("sync",)]


def test_scenario_axis_minimum():
    calls = translate(2, 7, -32768)
    assert calls == [("write", uinput.ABS_HAT2Y, -32768), ("sync",)]


def test_axis_value_is_not_clamped():
    calls = translate(2, 2, 1000000)
    assert calls == [("write", uinput.ABS_BRAKE, 1000000), ("sync",)]


def test_repeated_event_gives_independent_pairs():
    sink = RecordingSink()
    translator = EventTranslator(sink)
    event = InboundEvent(kind=1, index=4, value=1)
    translator.translate(event)
    translator.translate(event)
    pair = [("write", uinput.BTN_TL, 1), ("sync",)]
    assert sink.calls == pair + pair


def test_injected_tables():
    from mqtt2js.capabilities import CapabilityTable
    sink = RecordingSink()
    buttons = CapabilityTable("button", (uinput.BTN_TRIGGER,))
    translator = EventTranslator(sink, buttons=buttons, axes=AXES)
    translator.translate(InboundEvent(kind=1, index=0, value=0))
    assert sink.calls == [("write", uinput.BTN_TRIGGER, 0), ("sync",)]
    with pytest.raises(IndexOutOfRange):
        translator.translate(InboundEvent(kind=1, index=1, value=0))

# ==============================================================
# Rejected events
# ==============================================================

@pytest.mark.parametrize("kind, table", [(EventKind.BUTTON, BUTTONS), (EventKind.AXIS, AXES)])
@pytest.mark.parametrize("offset", [-len(BUTTONS) - 1, -1, 0, 1, 1000])
def test_out_of_range_writes_nothing(kind, table, offset):
    index = offset if offset < 0 else len(table) + offset
    sink = RecordingSink()
    with pytest.raises(IndexOutOfRange) as info:
        translate(int(kind), index, 1, sink)
    assert sink.calls == []
    assert info.value.kind == kind
    assert info.value.index == index
    assert info.value.bound == len(table)


def test_scenario_button_index_past_end():
    sink = RecordingSink()
    with pytest.raises(IndexOutOfRange) as info:
        translate(1, 11, 1, sink)
    assert sink.calls == []
    assert (info.value.index, info.value.bound) == (11, 11)
    assert "Invalid button number: 11" in str(info.value)


@pytest.mark.parametrize("kind", [0, 3, 0x80, 0x81, 99, -1])
def test_unknown_kind_writes_nothing(kind):
    sink = RecordingSink()
    with pytest.raises(UnknownKind) as info:
        translate(kind, 0, 0, sink)
    assert sink.calls == []
    assert info.value.kind == kind


def test_validation_errors_are_translation_errors():
    assert issubclass(UnknownKind, TranslationError)
    assert issubclass(IndexOutOfRange, TranslationError)
    assert not issubclass(DeviceWriteError, TranslationError)


def test_rejected_event_does_not_affect_next_one():
    sink = RecordingSink()
    translator = EventTranslator(sink)
    with pytest.raises(UnknownKind):
        translator.translate(InboundEvent(kind=99, index=0, value=0))
    translator.translate(InboundEvent(kind=2, index=0, value=-1))
    assert sink.calls == [("write", uinput.ABS_HAT0X, -1), ("sync",)]

# ==============================================================
# Sink failure
# ==============================================================

def test_sink_failure_propagates():
    sink = BrokenSink()
    with pytest.raises(DeviceWriteError):
        translate(1, 0, 1, sink)
    assert sink.calls == []
