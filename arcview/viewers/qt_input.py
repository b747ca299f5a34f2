"""Translate Qt input events into controller input events."""
from __future__ import annotations

import logging

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QEventPoint, QMouseEvent, QTouchEvent, QWheelEvent

from arcview.input.events import EventType, InputEvent, MouseButton, TouchPoint

logger = logging.getLogger(__name__)

_TOUCH_TYPES = (
    QEvent.TouchBegin,
    QEvent.TouchUpdate,
    QEvent.TouchEnd,
    QEvent.TouchCancel,
)

# Checked in order; the first held button wins.
_BUTTONS = (
    (Qt.LeftButton, MouseButton.LEFT),
    (Qt.RightButton, MouseButton.RIGHT),
    (Qt.MiddleButton, MouseButton.MIDDLE),
)


def is_input_event(event: QEvent) -> bool:
    """True for the event types translate_event handles."""
    return event.type() in (
        QEvent.MouseMove,
        QEvent.MouseButtonPress,
        QEvent.Wheel,
        *_TOUCH_TYPES,
    )


def mouse_button(buttons) -> MouseButton:
    """Map Qt button flags to the dominant MouseButton."""
    for flag, button in _BUTTONS:
        if buttons & flag:
            return button
    return MouseButton.NONE


def translate_event(event: QEvent) -> list[InputEvent]:
    """
    Convert a Qt event into zero or more input events.

    Touch updates can carry pressed, moved and released points at once, so
    they are split into separate start, move and end events in that order.

    :param event: Qt event delivered to the render surface
    :return: Input events in delivery order
    """
    etype = event.type()
    if etype == QEvent.MouseMove:
        return [_pointer(EventType.POINTER_MOVE, event, event.buttons())]
    if etype == QEvent.MouseButtonPress:
        return [_pointer(EventType.POINTER_DOWN, event, event.button())]
    if etype == QEvent.Wheel:
        return [_wheel(event)]
    if etype in _TOUCH_TYPES:
        return _touch(event)
    return []


def _pointer(event_type: EventType, event: QMouseEvent, buttons) -> InputEvent:
    pos = event.position()
    return InputEvent(event_type, position=(pos.x(), pos.y()), button=mouse_button(buttons))


def _wheel(event: QWheelEvent) -> InputEvent:
    # Qt reports scrolling up as positive; InputEvent uses positive for down.
    return InputEvent.wheel(-event.angleDelta().y())


def _touch(event: QTouchEvent) -> list[InputEvent]:
    if event.type() == QEvent.TouchCancel:
        points = tuple(_touch_point(p) for p in event.points())
        return [InputEvent(EventType.TOUCH_CANCEL, touches=points)]

    by_state: dict[EventType, list[TouchPoint]] = {
        EventType.TOUCH_START: [],
        EventType.TOUCH_MOVE: [],
        EventType.TOUCH_END: [],
    }
    for p in event.points():
        state = p.state()
        if state == QEventPoint.State.Pressed:
            by_state[EventType.TOUCH_START].append(_touch_point(p))
        elif state == QEventPoint.State.Updated:
            by_state[EventType.TOUCH_MOVE].append(_touch_point(p))
        elif state == QEventPoint.State.Released:
            by_state[EventType.TOUCH_END].append(_touch_point(p))

    return [InputEvent(t, touches=tuple(points)) for t, points in by_state.items() if points]


def _touch_point(point: QEventPoint) -> TouchPoint:
    pos = point.position()
    return TouchPoint(point.id(), (pos.x(), pos.y()))
