"""
Text "textures": text drawn centred on a fixed-size transparent canvas, later
stretched over a box face by the renderer.
"""
from collections import OrderedDict
from typing import Dict, Tuple

import pygame


class TextRenderer:
    """
    Renders and caches text surfaces.

    Fonts are looked up by name through pygame's system font list and fall
    back to pygame's bundled default font when the name is unknown.
    """

    def __init__(self, font_name: str = "arial", max_cached: int = 128):
        if not pygame.font.get_init():
            pygame.font.init()
        self.font_name = font_name
        self.max_cached = max_cached
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._surfaces: "OrderedDict[tuple, pygame.Surface]" = OrderedDict()

    def font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont(self.font_name, size)
        return self._fonts[size]

    def render(
        self,
        text: str,
        canvas: Tuple[int, int],
        font_size: int,
        color: Tuple[int, int, int],
    ) -> pygame.Surface:
        """
        Draw `text` centred on a canvas of the given pixel size.

        Text wider than the canvas is clipped at both edges.
        """
        key = (text, tuple(canvas), font_size, tuple(color))
        cached = self._surfaces.get(key)
        if cached is not None:
            self._surfaces.move_to_end(key)
            return cached

        width, height = int(canvas[0]), int(canvas[1])
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        if text:
            label = self.font(font_size).render(text, True, color)
            rect = label.get_rect(center=(width // 2, height // 2))
            surface.blit(label, rect)

        self._surfaces[key] = surface
        if len(self._surfaces) > self.max_cached:
            self._surfaces.popitem(last=False)
        return surface

    def clear(self):
        self._surfaces.clear()
