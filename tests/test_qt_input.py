import pytest
from PySide6.QtCore import QEvent, QPoint, QPointF, Qt
from PySide6.QtGui import QEventPoint, QMouseEvent, QWheelEvent

from arcview.input.events import EventType, MouseButton, TouchPoint
from arcview.viewers.qt_input import is_input_event, mouse_button, translate_event


class FakePoint:
    def __init__(self, identifier, x, y, state):
        self._id = identifier
        self._pos = QPointF(x, y)
        self._state = state

    def id(self):
        return self._id

    def position(self):
        return self._pos

    def state(self):
        return self._state


class FakeTouchEvent:
    def __init__(self, etype, *points):
        self._type = etype
        self._points = list(points)

    def type(self):
        return self._type

    def points(self):
        return self._points


Pressed = QEventPoint.State.Pressed
Updated = QEventPoint.State.Updated
Released = QEventPoint.State.Released
Stationary = QEventPoint.State.Stationary


def test_mouse_button_priority():
    assert mouse_button(Qt.LeftButton | Qt.RightButton) is MouseButton.LEFT
    assert mouse_button(Qt.RightButton) is MouseButton.RIGHT
    assert mouse_button(Qt.MiddleButton) is MouseButton.MIDDLE
    assert mouse_button(Qt.NoButton) is MouseButton.NONE


def test_mouse_move_carries_held_button(qapp):
    event = QMouseEvent(QEvent.MouseMove, QPointF(10, 20), QPointF(10, 20),
                        Qt.NoButton, Qt.RightButton, Qt.NoModifier)

    assert is_input_event(event)
    [out] = translate_event(event)
    assert out.type is EventType.POINTER_MOVE
    assert out.position == (10.0, 20.0)
    assert out.button is MouseButton.RIGHT


def test_mouse_press(qapp):
    event = QMouseEvent(QEvent.MouseButtonPress, QPointF(3, 4), QPointF(3, 4),
                        Qt.LeftButton, Qt.LeftButton, Qt.NoModifier)

    [out] = translate_event(event)
    assert out.type is EventType.POINTER_DOWN
    assert out.position == (3.0, 4.0)
    assert out.button is MouseButton.LEFT


def test_wheel_up_becomes_negative_delta(qapp):
    event = QWheelEvent(QPointF(0, 0), QPointF(0, 0), QPoint(0, 0), QPoint(0, 120),
                        Qt.NoButton, Qt.NoModifier, Qt.NoScrollPhase, False)

    [out] = translate_event(event)
    assert out.type is EventType.WHEEL
    assert out.delta == -120


def test_other_events_are_ignored():
    event = QEvent(QEvent.Resize)
    assert not is_input_event(event)
    assert translate_event(event) == []


def test_touch_update_splits_by_point_state():
    event = FakeTouchEvent(
        QEvent.TouchUpdate,
        FakePoint(1, 10, 10, Updated),
        FakePoint(2, 20, 20, Pressed),
        FakePoint(3, 30, 30, Released),
        FakePoint(4, 40, 40, Stationary),
    )

    out = translate_event(event)
    assert [e.type for e in out] == [EventType.TOUCH_START, EventType.TOUCH_MOVE, EventType.TOUCH_END]
    assert out[0].touches == (TouchPoint(2, (20.0, 20.0)),)
    assert out[1].touches == (TouchPoint(1, (10.0, 10.0)),)
    assert out[2].touches == (TouchPoint(3, (30.0, 30.0)),)


def test_touch_begin_with_two_points():
    event = FakeTouchEvent(QEvent.TouchBegin, FakePoint(0, 1, 2, Pressed), FakePoint(1, 3, 4, Pressed))

    [out] = translate_event(event)
    assert out.type is EventType.TOUCH_START
    assert [t.identifier for t in out.touches] == [0, 1]


@pytest.mark.parametrize("points, expected", [
    ((), ()),
    ((FakePoint(5, 1, 1, Updated),), (TouchPoint(5, (1.0, 1.0)),)),
])
def test_touch_cancel_keeps_all_points(points, expected):
    event = FakeTouchEvent(QEvent.TouchCancel, *points)

    [out] = translate_event(event)
    assert out.type is EventType.TOUCH_CANCEL
    assert out.touches == expected
