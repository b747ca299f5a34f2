"""Input layer - event queueing and gesture classification."""

from arcview.input.events import EventType, InputEvent, MouseButton, TouchPoint
from arcview.input.gesture_classifier import Gesture, GestureKind, classify_two_touch
from arcview.input.gesture_controller import GestureController
from arcview.input.handlers import GestureHandlers

__all__ = [
    "EventType",
    "InputEvent",
    "MouseButton",
    "TouchPoint",
    "Gesture",
    "GestureKind",
    "classify_two_touch",
    "GestureController",
    "GestureHandlers",
]
