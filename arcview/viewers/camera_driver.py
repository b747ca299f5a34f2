"""Queued input from a Qt surface applied to an arcball camera once per tick."""
from __future__ import annotations

import logging
from typing import Sequence

from PySide6 import QtCore, QtWidgets

from arcview.app.app_settings_manager import AppSettingsManager
from arcview.core.arcball_camera import ArcballCamera
from arcview.core.camera_state import CameraStateManager
from arcview.input.gesture_controller import GestureController
from arcview.input.handlers import GestureHandlers
from arcview.viewers.qt_input import is_input_event, translate_event

logger = logging.getLogger(__name__)


class CameraDriver(QtCore.QObject):
    """
    Owns the camera, the gesture controller and the pose state for one surface.

    eventFilter() only enqueues; the camera moves exclusively in tick(),
    which a QTimer calls every ``tick_interval_ms``.
    """

    poseChanged = QtCore.Signal(object)
    touchCountChanged = QtCore.Signal(int)

    def __init__(
            self,
            surface: QtWidgets.QWidget,
            settings: AppSettingsManager,
            eye: Sequence[float],
            center: Sequence[float],
            up: Sequence[float],
            parent: QtCore.QObject | None = None,
    ) -> None:
        """
        :param surface: Widget whose input drives the camera
        :param settings: Zoom speed, zoom scale, tick interval and run mode
        :param eye: Initial eye position
        :param center: Orbit pivot
        :param up: Up hint
        :param parent: Parent object
        """
        super().__init__(parent)
        self.surface = surface

        size = surface.size()
        self.camera = ArcballCamera(
            eye, center, up, settings.zoom_speed, (max(1, size.width()), max(1, size.height())))
        self.controller = GestureController(
            GestureHandlers.for_camera(self.camera, zoom_scale=settings.zoom_scale),
            raise_errors=settings.dev_mode,
        )
        self.state = CameraStateManager()
        self.state.add_pose_changed_callback(self.poseChanged.emit)
        self._touch_count = 0

        self.timer = QtCore.QTimer(self)
        self.timer.setInterval(settings.tick_interval_ms)
        self.timer.timeout.connect(self.tick)

        surface.installEventFilter(self)

    def start(self) -> None:
        """Publish the initial pose and start ticking."""
        self.sync()
        self.timer.start()
        logger.debug("Camera driver started (tick=%d ms).", self.timer.interval())

    def stop(self) -> None:
        self.timer.stop()

    def eventFilter(self, obj: QtCore.QObject, event: QtCore.QEvent) -> bool:
        if obj is self.surface:
            if is_input_event(event):
                for input_event in translate_event(event):
                    self.controller.enqueue(input_event)
                event.accept()
                return True
            if event.type() == QtCore.QEvent.Resize:
                size = event.size()
                self.camera.resize((max(1, size.width()), max(1, size.height())))
        return super().eventFilter(obj, event)

    def tick(self) -> None:
        """Drain queued input and publish the pose if the camera moved."""
        if self.controller.process_events():
            self.sync()
        if self.controller.touch_count != self._touch_count:
            self._touch_count = self.controller.touch_count
            self.touchCountChanged.emit(self._touch_count)

    def reset(self) -> None:
        """Return the camera to its initial pose and drop pending input."""
        self.controller.clear()
        self.camera.reset()
        self.sync()

    def sync(self) -> None:
        self.state.update_from(self.camera)
