"""Input event records queued by the gesture controller."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

Point = tuple[float, float]


class EventType(Enum):
    """Kinds of raw input the controller understands."""
    POINTER_MOVE = auto()
    POINTER_DOWN = auto()
    WHEEL = auto()
    TOUCH_START = auto()
    TOUCH_MOVE = auto()
    TOUCH_END = auto()
    TOUCH_CANCEL = auto()


class MouseButton(Enum):
    """Button held during a pointer event."""
    LEFT = auto()
    RIGHT = auto()
    MIDDLE = auto()
    NONE = auto()


@dataclass(frozen=True)
class TouchPoint:
    """A single contact: stable identifier plus surface-relative pixel position."""
    identifier: int
    position: Point


@dataclass(frozen=True)
class InputEvent:
    """
    One raw input event.

    Only the fields relevant to ``type`` are meaningful:
    - pointer events use ``position`` and ``button``
    - wheel events use ``delta``, positive when scrolled down (toward the user)
      as in DOM WheelEvent.deltaY
    - touch events use ``touches``, the contacts that changed
    """
    type: EventType
    position: Point = (0.0, 0.0)
    button: MouseButton = MouseButton.LEFT
    delta: float = 0.0
    touches: tuple[TouchPoint, ...] = ()

    @classmethod
    def pointer_move(cls, x: float, y: float, button: MouseButton = MouseButton.LEFT) -> InputEvent:
        return cls(EventType.POINTER_MOVE, position=(float(x), float(y)), button=button)

    @classmethod
    def pointer_down(cls, x: float, y: float, button: MouseButton = MouseButton.LEFT) -> InputEvent:
        return cls(EventType.POINTER_DOWN, position=(float(x), float(y)), button=button)

    @classmethod
    def wheel(cls, delta: float) -> InputEvent:
        return cls(EventType.WHEEL, delta=float(delta))

    @classmethod
    def touch(cls, event_type: EventType, *points: tuple[int, float, float]) -> InputEvent:
        """
        Build a touch event from (identifier, x, y) triples.

        :param event_type: One of the TOUCH_* types
        :param points: Changed contacts
        """
        touches = tuple(TouchPoint(int(i), (float(x), float(y))) for i, x, y in points)
        return cls(event_type, touches=touches)
