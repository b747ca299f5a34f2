"""VTK viewer driven by the arcball camera and gesture controller."""
from __future__ import annotations

import logging
from typing import Sequence

import vtk
from PySide6 import QtWidgets, QtCore

from arcview.app.app_settings_manager import AppSettingsManager
from arcview.core.camera_state import CameraPose
from arcview.utils import vtk_helpers
from arcview.utils.log_util import log_io
from arcview.viewers.camera_driver import CameraDriver

logger = logging.getLogger(__name__)


class ArcballViewer(QtWidgets.QWidget):
    """
    Render surface with arcball navigation.

    Provides:
    - VTK rendering setup (renderer, interactor, demo scene)
    - A CameraDriver that queues Qt input and moves the camera on its tick
    - poseChanged signal carrying a CameraPose

    Mouse: left drag rotates, right/middle drag pans, wheel zooms.
    Touch: one finger rotates, two fingers pinch to zoom or drag to pan.
    """

    # Signals
    poseChanged = QtCore.Signal(object)
    touchCountChanged = QtCore.Signal(int)

    def __init__(
            self,
            settings_manager: AppSettingsManager | None = None,
            eye: Sequence[float] = (0.0, 0.0, 6.0),
            center: Sequence[float] = (0.0, 0.0, 0.0),
            up: Sequence[float] = (0.0, 1.0, 0.0),
            parent: QtWidgets.QWidget | None = None,
    ) -> None:
        """
        Initialize the viewer.
        :param settings_manager: Application settings manager
        :param eye: Initial eye position
        :param center: Orbit pivot
        :param up: Up hint
        :param parent: Parent widget
        """
        super().__init__(parent)
        self.setting = settings_manager or AppSettingsManager()
        self._setup_ui()
        self._setup_vtk_rendering()

        self.driver = CameraDriver(self.vtk_widget, self.setting, eye, center, up, parent=self)
        self.driver.poseChanged.connect(self._on_pose_changed)
        self.driver.touchCountChanged.connect(self.touchCountChanged)

        self.interactor.Initialize()
        self.driver.start()

        logger.debug("ArcballViewer initialized.")

    @property
    def state(self):
        return self.driver.state

    def _setup_ui(self) -> None:
        """Setup the UI."""
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        from vtkmodules.qt.QVTKRenderWindowInteractor import QVTKRenderWindowInteractor
        self.vtk_widget = QVTKRenderWindowInteractor(self)
        self.vtk_widget.setAttribute(QtCore.Qt.WA_AcceptTouchEvents, True)
        layout.addWidget(self.vtk_widget)

        self.setLayout(layout)

    def _setup_vtk_rendering(self) -> None:
        """Setup the VTK rendering components."""
        render_window = self.vtk_widget.GetRenderWindow()

        self.renderer = vtk.vtkRenderer()
        self.renderer.SetBackground(0.1, 0.1, 0.15)
        render_window.AddRenderer(self.renderer)
        for actor in vtk_helpers.create_demo_actors():
            self.renderer.AddActor(actor)

        self.interactor = render_window.GetInteractor()
        # The arcball camera owns navigation; VTK's default style must not move the camera.
        self.interactor.SetInteractorStyle(vtk.vtkInteractorStyleUser())

        logger.debug("VTK rendering components initialized.")

    # =====================================================
    # Camera
    # =====================================================

    @log_io(level=logging.INFO)
    def reset_view(self) -> None:
        """Return the camera to its initial pose and drop pending input."""
        self.driver.reset()

    def _on_pose_changed(self, pose: CameraPose) -> None:
        vtk_helpers.apply_pose_to_vtk_camera(self.renderer.GetActiveCamera(), pose)
        self.renderer.ResetCameraClippingRange()
        if self.vtk_widget.isVisible():
            self.update_view()
        self.poseChanged.emit(pose)

    # =====================================================
    # Rendering
    # =====================================================

    def update_view(self) -> None:
        """Trigger a render."""
        self.vtk_widget.GetRenderWindow().Render()

    # =====================================================
    # Lifecycle
    # =====================================================

    def closeEvent(self, event) -> None:
        """Handle close event."""
        self.driver.stop()
        if hasattr(self, "interactor") and self.interactor:
            self.interactor.TerminateApp()
        super().closeEvent(event)
