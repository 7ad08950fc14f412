# calc_core - Scene Module
from .geometry import Box, Ray, Vec3
from .camera import OrbitControls, PerspectiveCamera
from .builder import CalculatorModel, build_calculator
from .raycast import pick_button

__all__ = [
    'Box',
    'Ray',
    'Vec3',
    'OrbitControls',
    'PerspectiveCamera',
    'CalculatorModel',
    'build_calculator',
    'pick_button',
]
