"""Optional handler set the gesture controller dispatches to."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING

from arcview.input.events import Point

if TYPE_CHECKING:
    from arcview.core.arcball_camera import ArcballCamera

# Wheel and pinch amounts are halved before reaching the camera.
DEFAULT_ZOOM_SCALE = 0.5


@dataclass(frozen=True)
class GestureHandlers:
    """
    Callbacks for each gesture. A handler left as None is a no-op.

    - on_rotate(prev: Point, cur: Point)
    - on_zoom(amount: float)
    - on_pan(delta: Point), +y up
    - on_pinch(amount: float), change in finger separation in pixels
    - on_press(position: Point)
    """
    on_rotate: Optional[Callable[[Point, Point], None]] = None
    on_zoom: Optional[Callable[[float], None]] = None
    on_pan: Optional[Callable[[Point], None]] = None
    on_pinch: Optional[Callable[[float], None]] = None
    on_press: Optional[Callable[[Point], None]] = None

    @classmethod
    def for_camera(cls, camera: ArcballCamera, zoom_scale: float = DEFAULT_ZOOM_SCALE,
                   on_press: Optional[Callable[[Point], None]] = None) -> GestureHandlers:
        """
        Wire every gesture to an arcball camera.

        Wheel and pinch share the same zoom mapping.

        :param camera: Camera to drive
        :param zoom_scale: Factor applied to wheel and pinch amounts
        :param on_press: Optional press handler, the camera has no use for presses
        """
        def zoom(amount: float) -> None:
            camera.zoom(amount * zoom_scale)

        return cls(
            on_rotate=camera.rotate,
            on_zoom=zoom,
            on_pan=camera.pan,
            on_pinch=zoom,
            on_press=on_press,
        )
