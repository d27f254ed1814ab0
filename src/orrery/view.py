'''Reference implementations of the renderer-side collaborators
Camera, CameraController and VisualEntity class definitions

The engine only needs the attributes and methods used here; any object with
the same shape (a scene-graph node, a Qt3D wrapper, a test double) can be
bound in their place.'''

import numpy as np
from dataclasses import dataclass
from typing import Optional
from .config import config


@dataclass
class VisualEntity:
    """
    Renderer-owned stand-in for a drawable body.

    The engine writes ``x, y, z, roll, tilt, r`` and never reads them back.

    Attributes
    ----------
    x, y, z : float
        Position [scene units]
    roll : float
        Axial rotation [degrees]
    tilt : float
        Axial tilt [degrees]
    r : float
        Visual radius [scene units]
    name : str, optional
        Identifier
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    roll: float = 0.0
    tilt: float = 0.0
    r: float = 0.0
    name: Optional[str] = None

    @property
    def translation(self) -> np.ndarray:
        """World-space translation of the entity"""
        return np.array([self.x, self.y, self.z])


class Camera:
    """
    Minimal perspective camera: a position and a point it looks at.

    Parameters
    ----------
    position : array-like, optional
        Initial position [scene units] (default origin)
    view_center : array-like, optional
        Initial look-at point [scene units] (default origin)
    """
    def __init__(self, position=(0.0, 0.0, 0.0), view_center=(0.0, 0.0, 0.0)):
        self._position = np.asarray(position, dtype=float).copy()
        self._view_center = np.asarray(view_center, dtype=float).copy()

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def view_center(self) -> np.ndarray:
        return self._view_center.copy()

    def set_position(self, position):
        self._position = np.asarray(position, dtype=float).copy()

    def set_view_center(self, center):
        self._view_center = np.asarray(center, dtype=float).copy()

    def __repr__(self):
        return (f"Camera(position={self._position.tolist()}, "
                f"view_center={self._view_center.tolist()})")


class CameraController:
    """
    Orbit-camera zoom settings.

    Parameters
    ----------
    default_zoom_limit : float, optional
        Closest allowed approach in the whole-system view
        (default config.DEFAULT_ZOOM_LIMIT)
    default_zoom_speed : float, optional
        Zoom speed in the whole-system view
        (default config.DEFAULT_ZOOM_SPEED)
    """
    def __init__(self, default_zoom_limit: Optional[float] = None,
                 default_zoom_speed: Optional[float] = None):
        if default_zoom_limit is None:
            default_zoom_limit = config.DEFAULT_ZOOM_LIMIT
        if default_zoom_speed is None:
            default_zoom_speed = config.DEFAULT_ZOOM_SPEED
        if default_zoom_limit <= 0:
            raise ValueError(
                f"Default zoom limit must be positive, got {default_zoom_limit}")
        if default_zoom_speed <= 0:
            raise ValueError(
                f"Default zoom speed must be positive, got {default_zoom_speed}")
        self._default_zoom_limit = float(default_zoom_limit)
        self._default_zoom_speed = float(default_zoom_speed)
        self._zoom_limit = self._default_zoom_limit
        self._zoom_speed = self._default_zoom_speed

    @property
    def zoom_limit(self) -> float:
        return self._zoom_limit

    @property
    def zoom_speed(self) -> float:
        return self._zoom_speed

    def set_zoom_limit(self, limit: float):
        self._zoom_limit = float(limit)

    def set_zoom_speed(self, speed: float):
        self._zoom_speed = float(speed)

    def default_zoom_limit(self) -> float:
        return self._default_zoom_limit

    def default_zoom_speed(self) -> float:
        return self._default_zoom_speed

    def set_default_zoom_limit(self):
        """Restore the whole-system zoom limit"""
        self._zoom_limit = self._default_zoom_limit

    def set_default_zoom_speed(self):
        """Restore the whole-system zoom speed"""
        self._zoom_speed = self._default_zoom_speed

    def __repr__(self):
        return (f"CameraController(zoom_limit={self._zoom_limit}, "
                f"zoom_speed={self._zoom_speed})")
