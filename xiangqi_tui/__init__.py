"""Xiangqi rules, coordinates, settings and character-cell board layout and drawing."""

__version__ = "0.1.0"