"""Gesture controller - queues raw input and turns it into gesture callbacks."""
from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Optional

from arcview.input.events import EventType, InputEvent, MouseButton, Point
from arcview.input.gesture_classifier import GestureKind, classify_two_touch
from arcview.input.handlers import GestureHandlers

logger = logging.getLogger(__name__)


class GestureController:
    """
    Buffers input events and dispatches them once per tick.

    Input delivery only calls enqueue(); handlers run exclusively inside
    process_events(), so whatever they drive (usually an ArcballCamera)
    changes at a single point per frame.

    The number of tracked touches selects the mode:
    - 0: idle
    - 1: single touch, moves rotate
    - 2+: the two lowest identifiers are classified as pinch or pan

    Usage:
        controller = GestureController(GestureHandlers.for_camera(camera))
        controller.enqueue(InputEvent.wheel(-50))
        controller.process_events()
    """

    def __init__(self, handlers: GestureHandlers | None = None, raise_errors: bool = False):
        """
        :param handlers: Gesture callbacks, all optional
        :param raise_errors: Re-raise handler exceptions instead of logging and continuing
        """
        self.handlers = handlers or GestureHandlers()
        self.raise_errors = raise_errors

        self.touches: dict[int, Point] = {}
        self.prev_mouse: Point = (0.0, 0.0)
        self.cur_mouse: Point = (0.0, 0.0)

        self._pending: deque[InputEvent] = deque()
        self._dispatch: dict[EventType, Callable[[InputEvent], None]] = {
            EventType.POINTER_MOVE: self._on_pointer_move,
            EventType.POINTER_DOWN: self._on_pointer_down,
            EventType.WHEEL: self._on_wheel,
            EventType.TOUCH_START: self._on_touch_start,
            EventType.TOUCH_MOVE: self._on_touch_move,
            EventType.TOUCH_END: self._on_touch_end,
            EventType.TOUCH_CANCEL: self._on_touch_cancel,
        }

    @property
    def pending_count(self) -> int:
        """Number of events waiting for the next process_events()."""
        return len(self._pending)

    @property
    def touch_count(self) -> int:
        return len(self.touches)

    def enqueue(self, event: InputEvent) -> None:
        """Queue an event. Never dispatches."""
        self._pending.append(event)

    def process_events(self) -> int:
        """
        Dispatch every event queued before this call, in arrival order.

        Events enqueued by handlers while draining wait for the next call.
        If a handler raises (raise_errors=True), the unprocessed rest of the
        batch stays queued ahead of anything newer.

        :return: Number of events processed
        """
        batch, self._pending = self._pending, deque()
        processed = 0
        try:
            while batch:
                event = batch.popleft()
                processed += 1
                self._dispatch[event.type](event)
        finally:
            if batch:
                batch.extend(self._pending)
                self._pending = batch
        if processed:
            logger.debug("Processed %d input events (touches=%d)", processed, len(self.touches))
        return processed

    def clear(self) -> None:
        """Drop pending events and forget all touches."""
        self._pending.clear()
        self.touches.clear()
        logger.debug("Gesture controller cleared")

    # =====================================================
    # Pointer
    # =====================================================

    def _on_pointer_move(self, event: InputEvent) -> None:
        self.cur_mouse = event.position
        prev, cur = self.prev_mouse, self.cur_mouse
        if event.button is MouseButton.LEFT:
            self._invoke("on_rotate", self.handlers.on_rotate, prev, cur)
        elif event.button in (MouseButton.RIGHT, MouseButton.MIDDLE):
            self._invoke("on_pan", self.handlers.on_pan, (cur[0] - prev[0], prev[1] - cur[1]))
        self.prev_mouse = self.cur_mouse

    def _on_pointer_down(self, event: InputEvent) -> None:
        self.cur_mouse = event.position
        self._invoke("on_press", self.handlers.on_press, self.cur_mouse)

    def _on_wheel(self, event: InputEvent) -> None:
        self._invoke("on_zoom", self.handlers.on_zoom, -event.delta)

    # =====================================================
    # Touch
    # =====================================================

    def _on_touch_start(self, event: InputEvent) -> None:
        for t in event.touches:
            self.touches[t.identifier] = t.position
        if len(event.touches) == 1:
            self._invoke("on_press", self.handlers.on_press, event.touches[0].position)

    def _on_touch_move(self, event: InputEvent) -> None:
        changed = {t.identifier: t.position for t in event.touches if t.identifier in self.touches}
        if len(changed) != len(event.touches):
            logger.debug("Ignoring moves for untracked touches: %s",
                         [t.identifier for t in event.touches if t.identifier not in self.touches])

        if len(self.touches) == 1:
            for ident, position in changed.items():
                self._invoke("on_rotate", self.handlers.on_rotate, self.touches[ident], position)
        elif len(self.touches) >= 2:
            self._classify(changed)

        self.touches.update(changed)

    def _classify(self, changed: dict[int, Point]) -> None:
        ids = sorted(self.touches)[:2]
        old = [self.touches[i] for i in ids]
        new = [changed.get(i, self.touches[i]) for i in ids]

        gesture = classify_two_touch(old, new)
        if gesture is None:
            return
        if gesture.kind is GestureKind.PINCH:
            self._invoke("on_pinch", self.handlers.on_pinch, gesture.amount)
        else:
            self._invoke("on_pan", self.handlers.on_pan, gesture.vector)

    def _on_touch_end(self, event: InputEvent) -> None:
        for t in event.touches:
            self.touches.pop(t.identifier, None)

    def _on_touch_cancel(self, event: InputEvent) -> None:
        if not event.touches:
            self.touches.clear()
            return
        self._on_touch_end(event)

    def _invoke(self, name: str, handler: Optional[Callable], *args) -> None:
        """Call an optional handler, logging any exception it raises."""
        if handler is None:
            return
        try:
            handler(*args)
        except Exception as e:
            logger.exception(f"Error in {name} handler: {e}")
            if self.raise_errors:
                raise
