"""Arcball camera: orbit, zoom and pan around a pivot point."""
from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from arcview.core import linalg
from arcview.utils.log_util import log_io

logger = logging.getLogger(__name__)

# Closest the eye may get to the pivot, in view-space units along -Z.
MIN_ZOOM_DEPTH = -0.2


def screen_to_arcball(p: Sequence[float]) -> np.ndarray:
    """
    Project a point in normalized device coordinates onto the arcball.

    Points inside the unit disc land on the front hemisphere. Points outside
    are pulled onto the equator, so dragging off the ball still yields a
    valid rotation axis.

    :param p: (x, y) in [-1, 1]
    :return: Pure quaternion (x, y, z, 0)
    """
    dist = p[0] * p[0] + p[1] * p[1]
    if dist <= 1.0:
        return linalg.vec((p[0], p[1], math.sqrt(1.0 - dist), 0.0))
    unit = linalg.normalize_vector(p[:2])
    return linalg.vec((unit[0], unit[1], 0.0, 0.0))


class ArcballCamera:
    """
    Camera orbiting a pivot ("center") with quaternion rotation.

    The view matrix is composed as ``translation @ rotation @ center_translation``:
    move the pivot to the origin, orient, then push back along -Z by the zoom
    distance. ``camera`` and ``inv_camera`` are rebuilt after every mutation.

    Usage:
        camera = ArcballCamera((0, 0, 5), (0, 0, 0), (0, 1, 0), 10.0, (800, 600))
        camera.rotate(prev_mouse, cur_mouse)
        view = camera.camera
    """

    def __init__(
            self,
            eye: Sequence[float],
            center: Sequence[float],
            up: Sequence[float],
            zoom_speed: float,
            screen_dims: Sequence[float],
    ) -> None:
        """
        :param eye: Eye position in world space
        :param center: Pivot the camera orbits around
        :param up: Up hint, must not be parallel to center - eye
        :param zoom_speed: Zoom scale applied to normalized wheel amounts
        :param screen_dims: (width, height) of the input surface in pixels
        """
        self.zoom_speed = float(zoom_speed)
        self.inv_screen = linalg.vec((0.0, 0.0))
        self.resize(screen_dims)

        self._initial = (linalg.vec(eye), linalg.vec(center), linalg.vec(up))

        self.rotation = linalg.quat_identity()
        self.translation = np.identity(4)
        self.center_translation = np.identity(4)
        self.camera = np.identity(4)
        self.inv_camera = np.identity(4)
        self.look_at(eye, center, up)

    @log_io()
    def look_at(self, eye: Sequence[float], center: Sequence[float], up: Sequence[float]) -> None:
        """
        Place the camera at *eye*, orbiting *center*.

        :param eye: Eye position in world space
        :param center: Pivot position in world space
        :param up: Up hint
        """
        eye = linalg.vec(eye)
        center = linalg.vec(center)
        up = linalg.normalize_vector(up)

        z_axis = center - eye
        view_dist = linalg.calculate_norm(z_axis)
        z_axis = linalg.normalize_vector(z_axis)

        x_axis = linalg.normalize_vector(np.cross(z_axis, up))
        y_axis = linalg.normalize_vector(np.cross(x_axis, z_axis))
        x_axis = linalg.normalize_vector(np.cross(z_axis, y_axis))

        self.center_translation = linalg.invert(linalg.translation(center))
        self.translation = linalg.translation((0.0, 0.0, -view_dist))

        # rows are the view-space axes; the camera looks down -Z
        rot_mat = np.array((x_axis, y_axis, -z_axis))
        self.rotation = linalg.quat_from_mat3(rot_mat)

        self.update_camera_matrix()

    def reset(self) -> None:
        """Return to the eye/center/up given at construction."""
        eye, center, up = self._initial
        self.look_at(eye, center, up)
        logger.info("Camera reset to eye=%s center=%s", eye.tolist(), center.tolist())

    def resize(self, screen_dims: Sequence[float]) -> None:
        """Update the surface size used to normalize pixel deltas."""
        width, height = screen_dims
        self.inv_screen = linalg.vec((1.0 / width, 1.0 / height))

    def rotate(self, prev_mouse: Sequence[float], cur_mouse: Sequence[float]) -> None:
        """
        Rotate by the arc between two pointer positions.

        :param prev_mouse: Previous pointer position in pixels
        :param cur_mouse: Current pointer position in pixels
        """
        m_prev = self._to_ndc(prev_mouse)
        m_cur = self._to_ndc(cur_mouse)

        prev_ball = screen_to_arcball(m_prev)
        cur_ball = screen_to_arcball(m_cur)

        # rotation = cur_ball * prev_ball * rotation
        rotation = linalg.quat_multiply(prev_ball, self.rotation)
        rotation = linalg.quat_multiply(cur_ball, rotation)
        self.rotation = linalg.quat_normalize(rotation)

        self.update_camera_matrix()

    def zoom(self, amount: float) -> None:
        """
        Move toward (positive) or away from (negative) the pivot.

        :param amount: Zoom amount in pixels
        """
        step = linalg.translation((0.0, 0.0, amount * self.inv_screen[1] * self.zoom_speed))
        self.translation = step @ self.translation
        if self.translation[2, 3] >= MIN_ZOOM_DEPTH:
            self.translation[2, 3] = MIN_ZOOM_DEPTH
        self.update_camera_matrix()

    def pan(self, mouse_delta: Sequence[float]) -> None:
        """
        Shift the pivot by a pixel delta, scaled by the zoom distance.

        :param mouse_delta: (dx, dy) in pixels, +y up
        """
        distance = self.distance
        delta = linalg.vec((
            mouse_delta[0] * self.inv_screen[0] * distance,
            mouse_delta[1] * self.inv_screen[1] * distance,
            0.0,
            0.0,
        ))
        world_delta = linalg.transform(self.inv_camera, delta)
        self.center_translation = linalg.translation(world_delta) @ self.center_translation
        self.update_camera_matrix()

    def update_camera_matrix(self) -> None:
        """Recompose ``camera`` and ``inv_camera`` from the current state."""
        rot_mat = linalg.mat4_from_quat(self.rotation)
        self.camera = self.translation @ rot_mat @ self.center_translation
        self.inv_camera = linalg.invert(self.camera)

    @property
    def distance(self) -> float:
        """Distance between the eye and the pivot."""
        return abs(float(self.translation[2, 3]))

    def center_pos(self) -> tuple[float, float, float]:
        """World-space pivot position."""
        return tuple(float(v) for v in -self.center_translation[:3, 3])

    def eye_pos(self) -> tuple[float, float, float]:
        """World-space eye position."""
        return tuple(float(v) for v in self.inv_camera[:3, 3])

    def eye_dir(self) -> tuple[float, float, float]:
        """Unit view direction in world space."""
        return self._view_axis((0.0, 0.0, -1.0, 0.0))

    def up_dir(self) -> tuple[float, float, float]:
        """Unit up direction in world space."""
        return self._view_axis((0.0, 1.0, 0.0, 0.0))

    def _view_axis(self, axis: Sequence[float]) -> tuple[float, float, float]:
        d = linalg.normalize_vector(linalg.transform(self.inv_camera, axis))
        return float(d[0]), float(d[1]), float(d[2])

    def _to_ndc(self, mouse: Sequence[float]) -> tuple[float, float]:
        return (
            linalg.clamp(mouse[0] * 2.0 * self.inv_screen[0] - 1.0, -1.0, 1.0),
            linalg.clamp(1.0 - mouse[1] * 2.0 * self.inv_screen[1], -1.0, 1.0),
        )
