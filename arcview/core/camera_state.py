"""Camera pose tracking separated from UI concerns."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from arcview.core.arcball_camera import ArcballCamera

logger = logging.getLogger(__name__)

Vector3 = tuple[float, float, float]


@dataclass(frozen=True)
class CameraPose:
    "Immutable snapshot of what a renderer needs from the camera."
    eye: Vector3
    direction: Vector3
    up: Vector3
    distance: float

    @classmethod
    def from_camera(cls, camera: ArcballCamera) -> CameraPose:
        return cls(
            eye=camera.eye_pos(),
            direction=camera.eye_dir(),
            up=camera.up_dir(),
            distance=camera.distance,
        )

    @property
    def focal_point(self) -> Vector3:
        """Point the eye looks at, one distance along the view direction."""
        return tuple(e + d * self.distance for e, d in zip(self.eye, self.direction))

    def is_close(self, other: CameraPose, tol: float = 1e-9) -> bool:
        values = zip(
            (*self.eye, *self.direction, *self.up, self.distance),
            (*other.eye, *other.direction, *other.up, other.distance),
        )
        return all(math.isclose(a, b, rel_tol=0.0, abs_tol=tol) for a, b in values)

    def __str__(self) -> str:
        x, y, z = self.eye
        return f"Eye: ({x:.2f}, {y:.2f}, {z:.2f}), Distance: {self.distance:.2f}"


class CameraStateManager:
    """
    Tracks the last published camera pose.

    Responsible for:
    - Holding the current pose.
    - Calling listeners when the pose changes.
    - Knowing nothing about Qt or VTK.
    """

    def __init__(self) -> None:
        self._pose: CameraPose | None = None
        self._on_pose_changed_callbacks: list[Callable[[CameraPose], None]] = []

    @property
    def pose(self) -> CameraPose | None:
        """Last published pose, or None before the first update."""
        return self._pose

    def update_from(self, camera: ArcballCamera) -> bool:
        """
        Publish the camera's pose if it moved.

        :param camera: Camera to read from
        :return: True if listeners were notified
        """
        new_pose = CameraPose.from_camera(camera)
        if self._pose is not None and self._pose.is_close(new_pose):
            return False
        self._pose = new_pose
        self._notify_pose_changed()
        return True

    def add_pose_changed_callback(self, callback: Callable[[CameraPose], None]) -> None:
        """
        Add a callback for pose changes.

        Callback signature: callback(pose: CameraPose) -> None
        """
        self._on_pose_changed_callbacks.append(callback)

    def remove_pose_changed_callback(self, callback: Callable[[CameraPose], None]) -> None:
        self._on_pose_changed_callbacks.remove(callback)

    def _notify_pose_changed(self) -> None:
        for callback in self._on_pose_changed_callbacks:
            try:
                callback(self._pose)
            except Exception as e:
                logger.exception(f"Error in pose changed callback: {e}")
