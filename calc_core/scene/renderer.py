"""
Flat-shaded renderer that draws the calculator onto a pygame surface.

Faces are culled when they point away from the camera, sorted far to near and
filled as polygons. Labelled front faces get their text canvas stretched over
the projected face.
"""
from typing import Any, Dict, List, NamedTuple, Tuple

import pygame

from ..config import DEFAULT_CONFIG, parse_color
from .builder import CalculatorModel
from .camera import PerspectiveCamera
from .geometry import Box, Face, Vec3, vec3
from .text import TextRenderer


class Lighting(NamedTuple):
    ambient: float
    directional: float
    direction: Vec3

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Lighting":
        lights = config.get("lights", DEFAULT_CONFIG["lights"])
        return cls(
            ambient=float(lights["ambient"]),
            directional=float(lights["directional"]),
            direction=vec3(lights["direction"]).normalized(),
        )

    def shade(self, color: Tuple[int, int, int], normal: Vec3) -> Tuple[int, int, int]:
        factor = self.ambient + self.directional * max(0.0, normal.dot(self.direction))
        return tuple(max(0, min(255, int(round(c * factor)))) for c in color)


class DrawItem(NamedTuple):
    depth: float
    box: Box
    face: Face
    points: List[Tuple[float, float]]
    color: Tuple[int, int, int]


class SceneRenderer:
    """Draws a CalculatorModel as seen by a camera."""

    def __init__(
        self,
        camera: PerspectiveCamera,
        text_renderer: TextRenderer,
        lighting: Lighting,
        background: Tuple[int, int, int] = (255, 255, 255),
    ):
        self.camera = camera
        self.text_renderer = text_renderer
        self.lighting = lighting
        self.background = background

    @classmethod
    def from_config(cls, camera: PerspectiveCamera, config: Dict[str, Any]) -> "SceneRenderer":
        return cls(
            camera=camera,
            text_renderer=TextRenderer(config["font"]["name"]),
            lighting=Lighting.from_config(config),
            background=parse_color(config["window"]["background"]),
        )

    def collect(self, model: CalculatorModel, width: int, height: int) -> List[DrawItem]:
        """Visible faces, farthest first."""
        items = []
        for box in model.boxes():
            for face in box.faces():
                if face.normal.dot(self.camera.position - face.center) <= 0:
                    continue
                projected = [self.camera.project(c, width, height) for c in face.corners]
                if any(p is None for p in projected):
                    continue
                base = box.face_color if face.name == "front" and box.face_color else box.color
                color = self.lighting.shade(base, face.normal) if box.lit else base
                items.append(DrawItem(
                    depth=self.camera.to_view(face.center).z,
                    box=box,
                    face=face,
                    points=[(p[0], p[1]) for p in projected],
                    color=color,
                ))
        items.sort(key=lambda item: item.depth, reverse=True)
        return items

    def render(self, surface: pygame.Surface, model: CalculatorModel):
        width, height = surface.get_size()
        surface.fill(self.background)
        for item in self.collect(model, width, height):
            pygame.draw.polygon(surface, item.color, item.points)
            if item.face.name == "front" and item.box.text:
                self._draw_label(surface, model, item)

    def _draw_label(self, surface: pygame.Surface, model: CalculatorModel, item: DrawItem):
        if item.box is model.screen:
            canvas, font_size = model.screen_canvas, model.screen_font_size
        else:
            canvas, font_size = model.button_canvas, model.button_font_size
        xs = [p[0] for p in item.points]
        ys = [p[1] for p in item.points]
        left, top = int(min(xs)), int(min(ys))
        w, h = int(max(xs)) - left, int(max(ys)) - top
        if w <= 0 or h <= 0:
            return
        label = self.text_renderer.render(item.box.text, canvas, font_size, item.box.text_color)
        surface.blit(pygame.transform.smoothscale(label, (w, h)), (left, top))

    def resize(self, width: int, height: int):
        self.camera.set_aspect(width, height)
