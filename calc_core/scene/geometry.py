"""
Minimal 3D geometry: vectors, axis-aligned boxes and ray intersection.
"""
import math
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple


class Vec3(NamedTuple):
    x: float
    y: float
    z: float

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> "Vec3":
        return Vec3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vec3":
        n = self.length()
        if n == 0:
            return Vec3(0.0, 0.0, 0.0)
        return Vec3(self.x / n, self.y / n, self.z / n)


def vec3(values) -> Vec3:
    """Build a Vec3 from any 3-item sequence."""
    x, y, z = values
    return Vec3(float(x), float(y), float(z))


class Ray(NamedTuple):
    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        return self.origin + self.direction * t


class Face(NamedTuple):
    """One side of a box as four corners wound counter-clockwise from outside."""
    name: str
    corners: Tuple[Vec3, Vec3, Vec3, Vec3]
    normal: Vec3

    @property
    def center(self) -> Vec3:
        c = self.corners
        return Vec3(
            (c[0].x + c[1].x + c[2].x + c[3].x) / 4,
            (c[0].y + c[1].y + c[2].y + c[3].y) / 4,
            (c[0].z + c[1].z + c[2].z + c[3].z) / 4,
        )


# Face order: right, left, top, bottom, front, back
FACE_NAMES = ("right", "left", "top", "bottom", "front", "back")


@dataclass
class Box:
    """
    An axis-aligned box mesh.

    `position` is the resting center; `offset` and `scale` are transient
    adjustments (the press animation uses them) applied on top of it.
    """
    name: str
    position: Vec3
    size: Vec3
    color: Tuple[int, int, int]
    face_color: Optional[Tuple[int, int, int]] = None
    text: str = ""
    text_color: Tuple[int, int, int] = (255, 255, 255)
    value: Optional[str] = None
    lit: bool = True
    offset: Vec3 = Vec3(0.0, 0.0, 0.0)
    scale: Vec3 = Vec3(1.0, 1.0, 1.0)

    @property
    def center(self) -> Vec3:
        return self.position + self.offset

    @property
    def half_extents(self) -> Vec3:
        return Vec3(
            self.size.x * self.scale.x / 2,
            self.size.y * self.scale.y / 2,
            self.size.z * self.scale.z / 2,
        )

    def bounds(self) -> Tuple[Vec3, Vec3]:
        c, h = self.center, self.half_extents
        return c - h, c + h

    def faces(self) -> List[Face]:
        lo, hi = self.bounds()
        x0, y0, z0 = lo
        x1, y1, z1 = hi
        return [
            Face("right", (Vec3(x1, y0, z1), Vec3(x1, y0, z0), Vec3(x1, y1, z0), Vec3(x1, y1, z1)), Vec3(1, 0, 0)),
            Face("left", (Vec3(x0, y0, z0), Vec3(x0, y0, z1), Vec3(x0, y1, z1), Vec3(x0, y1, z0)), Vec3(-1, 0, 0)),
            Face("top", (Vec3(x0, y1, z1), Vec3(x1, y1, z1), Vec3(x1, y1, z0), Vec3(x0, y1, z0)), Vec3(0, 1, 0)),
            Face("bottom", (Vec3(x0, y0, z0), Vec3(x1, y0, z0), Vec3(x1, y0, z1), Vec3(x0, y0, z1)), Vec3(0, -1, 0)),
            Face("front", (Vec3(x0, y0, z1), Vec3(x1, y0, z1), Vec3(x1, y1, z1), Vec3(x0, y1, z1)), Vec3(0, 0, 1)),
            Face("back", (Vec3(x1, y0, z0), Vec3(x0, y0, z0), Vec3(x0, y1, z0), Vec3(x1, y1, z0)), Vec3(0, 0, -1)),
        ]

    def intersect(self, ray: Ray) -> Optional[float]:
        """
        Distance along `ray` to the first hit on this box (slab method).

        Returns None when the ray misses or the box is entirely behind the
        origin. A ray starting inside the box reports the exit distance.
        """
        lo, hi = self.bounds()
        t_near, t_far = -math.inf, math.inf
        for o, d, a, b in zip(ray.origin, ray.direction, lo, hi):
            if d == 0:
                if o < a or o > b:
                    return None
                continue
            t1, t2 = (a - o) / d, (b - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)
            if t_near > t_far:
                return None
        if t_far < 0:
            return None
        return t_near if t_near >= 0 else t_far
