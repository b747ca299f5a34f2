import logging

import pytest

from arcview.input.events import EventType, InputEvent, MouseButton
from arcview.input.gesture_controller import GestureController
from arcview.input.handlers import GestureHandlers


class Recorder:
    """Collects handler calls as (name, args) tuples."""

    def __init__(self):
        self.calls = []

    def handler(self, name):
        def record(*args):
            self.calls.append((name, args))
        return record

    def handlers(self) -> GestureHandlers:
        return GestureHandlers(
            on_rotate=self.handler("rotate"),
            on_zoom=self.handler("zoom"),
            on_pan=self.handler("pan"),
            on_pinch=self.handler("pinch"),
            on_press=self.handler("press"),
        )

    def named(self, name):
        return [args for n, args in self.calls if n == name]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def controller(recorder):
    return GestureController(recorder.handlers())


def _start(controller, *points):
    for p in points:
        controller.enqueue(InputEvent.touch(EventType.TOUCH_START, p))
    controller.process_events()


def test_wheel_zooms_with_negated_delta(controller, recorder):
    controller.enqueue(InputEvent.wheel(-50))
    controller.process_events()

    assert recorder.calls == [("zoom", (50.0,))]


def test_enqueue_defers_dispatch_until_processed(controller, recorder):
    controller.enqueue(InputEvent.wheel(10))
    controller.enqueue(InputEvent.pointer_down(1, 2))

    assert recorder.calls == []
    assert controller.pending_count == 2

    assert controller.process_events() == 2
    assert controller.pending_count == 0
    assert [n for n, _ in recorder.calls] == ["zoom", "press"]

    assert controller.process_events() == 0
    assert len(recorder.calls) == 2


def test_events_dispatch_in_arrival_order(controller, recorder):
    controller.enqueue(InputEvent.pointer_down(0, 0))
    controller.enqueue(InputEvent.wheel(1))
    controller.enqueue(InputEvent.pointer_move(3, 4))
    controller.enqueue(InputEvent.wheel(2))
    controller.process_events()

    assert [n for n, _ in recorder.calls] == ["press", "zoom", "rotate", "zoom"]


def test_pointer_move_rotates_from_previous_position(controller, recorder):
    controller.enqueue(InputEvent.pointer_move(20, 30))
    controller.enqueue(InputEvent.pointer_move(25, 31))
    controller.process_events()

    assert recorder.named("rotate") == [
        ((0.0, 0.0), (20.0, 30.0)),
        ((20.0, 30.0), (25.0, 31.0)),
    ]
    assert controller.prev_mouse == (25.0, 31.0)


def test_secondary_drag_pans_with_y_up(controller, recorder):
    controller.enqueue(InputEvent.pointer_move(10, 10, MouseButton.NONE))
    controller.enqueue(InputEvent.pointer_move(14, 7, MouseButton.RIGHT))
    controller.process_events()

    assert recorder.named("pan") == [((4.0, 3.0),)]
    assert recorder.named("rotate") == []


def test_move_without_button_only_tracks_position(controller, recorder):
    controller.enqueue(InputEvent.pointer_move(10, 10, MouseButton.NONE))
    controller.process_events()

    assert recorder.calls == []
    assert controller.prev_mouse == (10.0, 10.0)


def test_pointer_down_presses(controller, recorder):
    controller.enqueue(InputEvent.pointer_down(7, 8))
    controller.process_events()

    assert recorder.named("press") == [((7.0, 8.0),)]
    assert controller.cur_mouse == (7.0, 8.0)


def test_single_touch_start_presses(controller, recorder):
    _start(controller, (1, 10, 20))

    assert recorder.named("press") == [((10.0, 20.0),)]
    assert controller.touches == {1: (10.0, 20.0)}


def test_multi_contact_touch_start_does_not_press(controller, recorder):
    controller.enqueue(InputEvent.touch(EventType.TOUCH_START, (1, 0, 0), (2, 50, 0)))
    controller.process_events()

    assert recorder.named("press") == []
    assert controller.touch_count == 2


def test_single_touch_move_rotates(controller, recorder):
    _start(controller, (4, 100, 100))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_MOVE, (4, 110, 95)))
    controller.process_events()

    assert recorder.named("rotate") == [((100.0, 100.0), (110.0, 95.0))]
    assert controller.touches[4] == (110.0, 95.0)


def test_two_touch_pinch(controller, recorder):
    _start(controller, (1, 0, 100), (2, 100, 100))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_MOVE, (1, 10, 100), (2, 90, 100)))
    controller.process_events()

    assert recorder.named("pinch") == [(pytest.approx(-20.0),)]
    assert recorder.named("pan") == []
    assert controller.touches == {1: (10.0, 100.0), 2: (90.0, 100.0)}


def test_two_touch_pan(controller, recorder):
    _start(controller, (1, 0, 100), (2, 100, 100))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_MOVE, (1, 5, 105), (2, 105, 105)))
    controller.process_events()

    assert recorder.named("pan") == [(pytest.approx((5.0, -5.0)),)]
    assert recorder.named("pinch") == []


def test_ambiguous_motion_still_updates_touches(controller, recorder):
    _start(controller, (1, 0, 0), (2, 100, 0))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_MOVE, (1, 10, 0)))
    controller.process_events()

    assert recorder.named("pinch") == []
    assert recorder.named("pan") == []
    assert controller.touches == {1: (10.0, 0.0), 2: (100.0, 0.0)}


def test_classification_uses_lowest_identifiers(controller, recorder):
    _start(controller, (7, 50, 300), (3, 0, 100), (5, 100, 100))
    controller.enqueue(InputEvent.touch(
        EventType.TOUCH_MOVE, (7, 60, 250), (3, 10, 100), (5, 90, 100)))
    controller.process_events()

    assert recorder.named("pinch") == [(pytest.approx(-20.0),)]


def test_move_for_untracked_touch_is_ignored(controller, recorder):
    _start(controller, (1, 0, 0))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_MOVE, (9, 5, 5)))
    controller.process_events()

    assert 9 not in controller.touches
    assert recorder.named("rotate") == []


def test_touch_end_removes_and_is_idempotent(controller):
    _start(controller, (1, 0, 0), (2, 10, 0))

    controller.enqueue(InputEvent.touch(EventType.TOUCH_END, (1, 0, 0)))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_END, (1, 0, 0)))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_END, (42, 0, 0)))
    controller.process_events()

    assert controller.touches == {2: (10.0, 0.0)}


def test_touch_cancel(controller):
    _start(controller, (1, 0, 0), (2, 10, 0), (3, 20, 0))

    controller.enqueue(InputEvent.touch(EventType.TOUCH_CANCEL, (2, 10, 0)))
    controller.process_events()
    assert set(controller.touches) == {1, 3}

    controller.enqueue(InputEvent(EventType.TOUCH_CANCEL))
    controller.process_events()
    assert controller.touches == {}


def test_missing_handlers_are_no_ops():
    controller = GestureController(GestureHandlers(on_zoom=None))
    controller.enqueue(InputEvent.wheel(5))
    controller.enqueue(InputEvent.pointer_move(1, 1))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_START, (1, 0, 0)))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_START, (2, 100, 0)))
    controller.enqueue(InputEvent.touch(EventType.TOUCH_MOVE, (1, 10, 0), (2, 90, 0)))

    assert controller.process_events() == 5
    assert controller.touches == {1: (10.0, 0.0), 2: (90.0, 0.0)}


def test_events_enqueued_by_handlers_wait_for_next_pass():
    controller = GestureController()
    seen = []

    def on_zoom(amount):
        seen.append(amount)
        if amount == 1:
            controller.enqueue(InputEvent.wheel(-2))

    controller.handlers = GestureHandlers(on_zoom=on_zoom)
    controller.enqueue(InputEvent.wheel(-1))

    assert controller.process_events() == 1
    assert seen == [1]
    assert controller.pending_count == 1

    controller.process_events()
    assert seen == [1, 2]


def test_handler_error_is_logged_and_drain_continues(recorder, caplog):
    def boom(amount):
        raise RuntimeError("boom")

    controller = GestureController(GestureHandlers(on_zoom=boom, on_press=recorder.handler("press")))
    controller.enqueue(InputEvent.wheel(1))
    controller.enqueue(InputEvent.pointer_down(3, 3))

    with caplog.at_level(logging.ERROR):
        assert controller.process_events() == 2

    assert "Error in on_zoom handler" in caplog.text
    assert recorder.named("press") == [((3.0, 3.0),)]


def test_handler_error_raises_in_strict_mode_and_keeps_rest_queued(recorder):
    def boom(amount):
        raise RuntimeError("boom")

    controller = GestureController(
        GestureHandlers(on_zoom=boom, on_press=recorder.handler("press")),
        raise_errors=True,
    )
    controller.enqueue(InputEvent.wheel(1))
    controller.enqueue(InputEvent.pointer_down(3, 3))

    with pytest.raises(RuntimeError):
        controller.process_events()

    assert controller.pending_count == 1
    controller.process_events()
    assert recorder.named("press") == [((3.0, 3.0),)]


def test_clear_drops_pending_and_touches(controller):
    _start(controller, (1, 0, 0))
    controller.enqueue(InputEvent.wheel(1))

    controller.clear()

    assert controller.pending_count == 0
    assert controller.touches == {}
