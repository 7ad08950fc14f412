# calc_core - Interface Module
from .controller import InputController

__all__ = ['InputController']
