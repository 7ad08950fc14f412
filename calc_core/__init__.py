# calc_core - 3D calculator core
__version__ = "0.1.0"
