"""
Builds the calculator model (body, screen, button grid) from config.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import DEFAULT_CONFIG, ConfigError, parse_color
from ..tokens import classify
from .geometry import Box, Vec3


class LayoutError(ConfigError):
    """Raised when the configured button layout cannot be built."""


@dataclass
class CalculatorModel:
    """Everything that makes up the calculator in the scene."""
    body: Box
    screen: Box
    buttons: List[Box] = field(default_factory=list)
    screen_canvas: tuple = (300, 80)
    screen_font_size: int = 40
    button_canvas: tuple = (70, 70)
    button_font_size: int = 20

    def boxes(self) -> List[Box]:
        """All boxes in scene order: body, screen, then buttons row by row."""
        return [self.body, self.screen] + self.buttons

    def button_for(self, value: str) -> Optional[Box]:
        """Find the button carrying `value`, if any."""
        for button in self.buttons:
            if button.value == value:
                return button
        return None


def build_calculator(config: Optional[Dict[str, Any]] = None) -> CalculatorModel:
    """
    Lay out the calculator.

    The screen sits `margin` below the top of the body, and the button grid
    starts one padding below the screen, centred horizontally.
    """
    config = config or DEFAULT_CONFIG
    body_cfg = config["body"]
    screen_cfg = config["screen"]
    btn_cfg = config["buttons"]

    body_w = float(body_cfg["width"])
    body_h = float(body_cfg["height"])
    body_d = float(body_cfg["depth"])

    body = Box(
        name="body",
        position=Vec3(0.0, 0.0, 0.0),
        size=Vec3(body_w, body_h, body_d),
        color=parse_color(body_cfg["color"]),
    )

    screen_w = body_w * float(screen_cfg["width_ratio"])
    screen_h = float(screen_cfg["height"])
    screen_y = body_h / 2 - screen_h - float(screen_cfg["margin"])
    z = float(btn_cfg["z"])

    screen = Box(
        name="screen",
        position=Vec3(0.0, screen_y, z),
        size=Vec3(screen_w, screen_h, 1.0),
        color=parse_color(screen_cfg["color"]),
        text_color=parse_color(screen_cfg["text_color"]),
        lit=False,
    )

    bw = float(btn_cfg["width"])
    bh = float(btn_cfg["height"])
    bd = float(btn_cfg["depth"])
    pad = float(btn_cfg["padding"])
    layout = btn_cfg["layout"]
    columns = max((len(row) for row in layout), default=0)

    side_color = parse_color(btn_cfg["color"])
    face_color = parse_color(btn_cfg["face_color"])
    text_color = parse_color(btn_cfg["text_color"])

    start_x = -(bw * columns + pad * (columns - 1)) / 2 + bw / 2
    y = screen_y - screen_h - pad - bh
    buttons = []
    for row in layout:
        x = start_x
        for value in row:
            value = str(value)
            if classify(value) is None:
                raise LayoutError(f"Unsupported button value in layout: {value!r}")
            buttons.append(Box(
                name=f"button:{value}",
                position=Vec3(x, y, z),
                size=Vec3(bw, bh, bd),
                color=side_color,
                face_color=face_color,
                text=value,
                text_color=text_color,
                value=value,
            ))
            x += bw + pad
        y -= bh + pad

    return CalculatorModel(
        body=body,
        screen=screen,
        buttons=buttons,
        screen_canvas=tuple(screen_cfg["canvas"]),
        screen_font_size=int(screen_cfg["font_size"]),
        button_canvas=tuple(btn_cfg["canvas"]),
        button_font_size=int(btn_cfg["font_size"]),
    )
