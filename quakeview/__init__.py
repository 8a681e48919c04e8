"""Quake Visualizer - display pipeline for the USGS earthquake feeds."""

__version__ = "0.1.0"
