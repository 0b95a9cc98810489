"""Exceptions raised by mqtt2js.

Decode and translation errors are recoverable: the offending message is
dropped and the next one is processed. Setup, broker and write errors are
fatal to the process.
"""


class Mqtt2jsError(Exception):
    """Base class for every error raised by this package"""
    pass


# ============================================================================
# RECOVERABLE
# ============================================================================

class DecodeError(Mqtt2jsError):
    """Raised when a payload cannot be turned into an InboundEvent"""
    pass


class InvalidIndex(Mqtt2jsError):
    """Raised by a capability table when an index is outside [0, bound)"""

    def __init__(self, index: int, bound: int):
        super().__init__(f"index {index} outside [0, {bound})")
        self.index = index
        self.bound = bound


class TranslationError(Mqtt2jsError):
    """Raised when a decoded event does not match the device capabilities"""
    pass


class UnknownKind(TranslationError):
    def __init__(self, kind: int):
        super().__init__(f"Invalid event `type`: {kind}")
        self.kind = kind


class IndexOutOfRange(TranslationError):
    def __init__(self, kind, index: int, bound: int):
        label = getattr(kind, "label", kind)
        super().__init__(f"Invalid {label} number: {index} (valid: 0..{bound - 1})")
        self.kind = kind
        self.index = index
        self.bound = bound


# ============================================================================
# FATAL
# ============================================================================

class DeviceSetupError(Mqtt2jsError):
    """Raised when the virtual joystick cannot be created"""
    pass


class DeviceWriteError(Mqtt2jsError):
    """Raised when the kernel rejects a write to the virtual joystick"""
    pass


class BrokerError(Mqtt2jsError):
    """Raised when the broker refuses the connection or the subscription"""
    pass
