"""
Picking: which box, if any, lies under a screen point.
"""
from typing import Iterable, List, NamedTuple, Optional

from .camera import PerspectiveCamera
from .geometry import Box, Ray


class Intersection(NamedTuple):
    distance: float
    box: Box


def intersect_boxes(ray: Ray, boxes: Iterable[Box]) -> List[Intersection]:
    """All boxes hit by `ray`, nearest first."""
    hits = []
    for box in boxes:
        t = box.intersect(ray)
        if t is not None:
            hits.append(Intersection(t, box))
    hits.sort(key=lambda hit: hit.distance)
    return hits


def pick_button(
    camera: PerspectiveCamera,
    boxes: Iterable[Box],
    x: float,
    y: float,
    width: int,
    height: int,
) -> Optional[Box]:
    """
    The nearest box under pixel (x, y) that carries a button value.

    Boxes without a value (body, screen) never stop the search.
    """
    if width <= 0 or height <= 0:
        return None
    ray = camera.ray_from_screen(x, y, width, height)
    for hit in intersect_boxes(ray, boxes):
        if hit.box.value is not None:
            return hit.box
    return None
