"""
Perspective camera and orbit controls.
"""
import math
from typing import Callable, List, Optional, Tuple

from .geometry import Ray, Vec3

WORLD_UP = Vec3(0.0, 1.0, 0.0)

# Keeps the camera off the poles, where the view basis degenerates
_POLAR_EPSILON = 1e-6


class PerspectiveCamera:
    """
    Pinhole camera looking from `position` at `target`.

    `fov` is the vertical field of view in degrees. Screen coordinates are
    pixels with the origin at the top-left corner.
    """

    def __init__(
        self,
        fov: float = 40.0,
        aspect: float = 1.0,
        near: float = 1.0,
        far: float = 5000.0,
        position: Vec3 = Vec3(0.0, 150.0, 400.0),
        target: Vec3 = Vec3(0.0, 0.0, 0.0),
    ):
        self.fov = float(fov)
        self.aspect = float(aspect)
        self.near = float(near)
        self.far = float(far)
        self.position = position
        self.target = target

    @property
    def focal(self) -> float:
        return 1.0 / math.tan(math.radians(self.fov) / 2)

    def basis(self) -> Tuple[Vec3, Vec3, Vec3]:
        """(right, up, forward) unit vectors of the view."""
        forward = (self.target - self.position).normalized()
        right = forward.cross(WORLD_UP).normalized()
        if right.length() == 0:
            right = Vec3(1.0, 0.0, 0.0)
        up = right.cross(forward)
        return right, up, forward

    def to_view(self, point: Vec3) -> Vec3:
        """World point to camera space (x right, y up, z = depth)."""
        right, up, forward = self.basis()
        rel = point - self.position
        return Vec3(rel.dot(right), rel.dot(up), rel.dot(forward))

    def project(self, point: Vec3, width: int, height: int) -> Optional[Tuple[float, float, float]]:
        """
        Project a world point to pixel coordinates.

        Returns (x, y, depth), or None for points outside the near/far range.
        """
        v = self.to_view(point)
        if v.z < self.near or v.z > self.far:
            return None
        f = self.focal
        ndc_x = (v.x * f / self.aspect) / v.z
        ndc_y = (v.y * f) / v.z
        return (ndc_x + 1) / 2 * width, (1 - ndc_y) / 2 * height, v.z

    def ray_from_ndc(self, ndc_x: float, ndc_y: float) -> Ray:
        """Ray from the camera through a point in normalized device coordinates."""
        right, up, forward = self.basis()
        f = self.focal
        direction = forward + right * (ndc_x * self.aspect / f) + up * (ndc_y / f)
        return Ray(self.position, direction.normalized())

    def ray_from_screen(self, x: float, y: float, width: int, height: int) -> Ray:
        """Ray through a pixel, using the same mapping as the click handler."""
        return self.ray_from_ndc(*screen_to_ndc(x, y, width, height))

    def set_aspect(self, width: int, height: int):
        """Match the viewport shape after a resize."""
        if height > 0:
            self.aspect = width / height


def screen_to_ndc(x: float, y: float, width: int, height: int) -> Tuple[float, float]:
    """Pixel to normalized device coordinates, y pointing up."""
    return (x / width) * 2 - 1, -(y / height) * 2 + 1


class OrbitControls:
    """
    Rotates the camera around its target on drag and dollies on wheel.

    Listeners registered with on_change() run after every camera move.
    """

    def __init__(
        self,
        camera: PerspectiveCamera,
        rotate_speed: float = 1.0,
        zoom_speed: float = 1.0,
        min_distance: float = 0.0,
        max_distance: float = math.inf,
    ):
        self.camera = camera
        self.rotate_speed = rotate_speed
        self.zoom_speed = zoom_speed
        self.min_distance = min_distance
        self.max_distance = max_distance
        self._listeners: List[Callable[[], None]] = []

    def on_change(self, callback: Callable[[], None]):
        self._listeners.append(callback)

    def _spherical(self) -> Tuple[float, float, float]:
        offset = self.camera.position - self.camera.target
        radius = offset.length()
        if radius == 0:
            return 0.0, 0.0, math.pi / 2
        theta = math.atan2(offset.x, offset.z)
        phi = math.acos(max(-1.0, min(1.0, offset.y / radius)))
        return radius, theta, phi

    def _apply(self, radius: float, theta: float, phi: float):
        phi = max(_POLAR_EPSILON, min(math.pi - _POLAR_EPSILON, phi))
        radius = max(self.min_distance, min(self.max_distance, radius))
        sin_phi = math.sin(phi)
        offset = Vec3(
            radius * sin_phi * math.sin(theta),
            radius * math.cos(phi),
            radius * sin_phi * math.cos(theta),
        )
        self.camera.position = self.camera.target + offset
        for listener in list(self._listeners):
            listener()

    def rotate(self, dx: float, dy: float, viewport_height: int):
        """
        Orbit by a pointer drag of (dx, dy) pixels.

        A drag across the full viewport height turns the camera a full circle.
        """
        if viewport_height <= 0:
            return
        radius, theta, phi = self._spherical()
        theta -= 2 * math.pi * dx / viewport_height * self.rotate_speed
        phi -= 2 * math.pi * dy / viewport_height * self.rotate_speed
        self._apply(radius, theta, phi)

    def dolly(self, steps: float):
        """Zoom by wheel steps; positive steps move closer."""
        radius, theta, phi = self._spherical()
        scale = 0.95 ** self.zoom_speed
        radius = radius * (scale ** steps)
        self._apply(radius, theta, phi)
