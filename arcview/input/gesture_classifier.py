"""Pinch versus pan classification for two moving touches."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

import numpy as np

from arcview.core import linalg

# Minimum |cos| between a finger's motion and the reference axis.
ALIGNMENT_THRESHOLD = 0.5


class GestureKind(Enum):
    PINCH = auto()
    PAN = auto()


@dataclass(frozen=True)
class Gesture:
    """
    Outcome of classifying one two-touch move.

    For PINCH, ``amount`` is the change in finger separation (negative when
    closing). For PAN, ``vector`` is the mean finger motion with y flipped.
    """
    kind: GestureKind
    amount: float = 0.0
    vector: tuple[float, float] = (0.0, 0.0)


def _aligned(a: float, b: float, same_sign: bool) -> bool:
    if abs(a) <= ALIGNMENT_THRESHOLD or abs(b) <= ALIGNMENT_THRESHOLD:
        return False
    return (np.sign(a) == np.sign(b)) == same_sign


def classify_two_touch(
        old_positions: Sequence[Sequence[float]],
        new_positions: Sequence[Sequence[float]],
) -> Gesture | None:
    """
    Decide whether two touches are pinching or panning.

    Fingers moving in opposite directions along the line joining them pinch;
    fingers moving together in the same direction pan. Anything else is
    ambiguous and yields None.

    :param old_positions: Previous (x, y) of touch 0 and touch 1
    :param new_positions: Current (x, y) of touch 0 and touch 1
    :return: Gesture, or None when the motion is ambiguous
    """
    old0, old1 = linalg.vec(old_positions[0]), linalg.vec(old_positions[1])
    new0, new1 = linalg.vec(new_positions[0]), linalg.vec(new_positions[1])

    motion0 = new0 - old0
    motion1 = new1 - old1
    dir0 = linalg.normalize_vector(motion0)
    dir1 = linalg.normalize_vector(motion1)

    pinch_axis = linalg.normalize_vector(old1 - old0)
    mean_motion = linalg.lerp(motion0, motion1, 0.5)
    pan_axis = linalg.normalize_vector(mean_motion)

    pinch0, pinch1 = float(pinch_axis @ dir0), float(pinch_axis @ dir1)
    pan0, pan1 = float(pan_axis @ dir0), float(pan_axis @ dir1)

    if _aligned(pinch0, pinch1, same_sign=False):
        old_dist = linalg.calculate_distance(old0, old1)
        new_dist = linalg.calculate_distance(new0, new1)
        return Gesture(GestureKind.PINCH, amount=new_dist - old_dist)

    if _aligned(pan0, pan1, same_sign=True):
        return Gesture(GestureKind.PAN, vector=(float(mean_motion[0]), float(-mean_motion[1])))

    return None
