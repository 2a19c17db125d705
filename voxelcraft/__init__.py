"""Headless voxel world simulation: terrain, meshing, raycasting and character physics."""

__version__ = "0.1.0"