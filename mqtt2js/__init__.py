"""
mqtt2js - virtual joystick driven by a MQTT topic.

Every message received on the topic is a JSON object
``{"type": 1|2, "number": index, "value": state}`` that is replayed on a
uinput joystick (type 1 = button, type 2 = axis).
"""

__version__ = "0.1"
