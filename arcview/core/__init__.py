"""Core components layer - camera math, Qt and VTK independent."""

from arcview.core.arcball_camera import ArcballCamera, screen_to_arcball
from arcview.core.camera_state import CameraPose, CameraStateManager

__all__ = [
    "ArcballCamera",
    "screen_to_arcball",
    "CameraPose",
    "CameraStateManager",
]
