import copy
import logging

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QLabel

from arcview.app.app_settings_manager import AppSettingsManager
from arcview.core.camera_state import CameraPose
from arcview.status import STATUS_FIELDS, StatusField
from arcview.viewers.arcball_viewer import ArcballViewer

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window holding the arcball viewer and its status bar."""

    def __init__(self, settings_mgr: AppSettingsManager | None = None):
        """
        Initialize the main window.

        :param settings_mgr: Application settings manager.
        """
        super().__init__()

        self.setting = settings_mgr or AppSettingsManager()

        # Per-window copies so status values are not shared.
        self.status_fields: dict[str, StatusField] = {
            k: copy.deepcopy(v) for k, v in STATUS_FIELDS.items()
        }
        self._status_label: dict[str, QLabel] = {}

        self.setWindowTitle("ArcView")
        self._setup_ui()
        self._setup_menus()
        self._setup_status_bar()

        pose = self.viewer.state.pose
        if pose is not None:
            self._on_pose_changed(pose)

        self.show()

    def _setup_ui(self) -> None:
        """Setup the main UI layout"""
        self.viewer = ArcballViewer(settings_manager=self.setting, parent=self)
        self.setCentralWidget(self.viewer)
        self.setGeometry(100, 100, 1024, 768)

        self.viewer.poseChanged.connect(self._on_pose_changed)
        self.viewer.touchCountChanged.connect(self._on_touch_count_changed)

    def _setup_menus(self) -> None:
        """Create the menus for the main window."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        file_menu.addAction("&Quit", self.close)

        view_menu = menubar.addMenu("&View")
        self.reset_action = QAction("&Reset View", self)
        self.reset_action.setShortcut("R")
        self.reset_action.triggered.connect(self.viewer.reset_view)
        view_menu.addAction(self.reset_action)

    def _setup_status_bar(self) -> None:
        """Setup the status bar."""
        status_bar = self.statusBar()
        for key in self.status_fields:
            label = QLabel("", self)
            status_bar.addPermanentWidget(label)
            self._status_label[key] = label
            self._update_status(key, self.status_fields[key].value)

    # =====================================================
    # Signal Handlers
    # =====================================================

    def _on_pose_changed(self, pose: CameraPose) -> None:
        self._update_status("eye", pose.eye)
        self._update_status("direction", pose.direction)
        self._update_status("distance", pose.distance)

    def _on_touch_count_changed(self, count: int) -> None:
        self._update_status("touches", count)

    def _update_status(self, key: str, value) -> None:
        """Update status bar label."""
        label = self._status_label.get(key)
        field = self.status_fields.get(key)
        if label is None or field is None:
            return

        field.value = value
        try:
            label.setText(field.text())
        except (TypeError, ValueError) as e:
            logger.warning(f"Error formatting status field {key}: {e}")
            label.setText(str(value))
