"""Arcball camera and touch gesture navigation for 3D views."""

__version__ = "0.1.0"
