"""TRS transforms, an FPS camera, input tracking, logging, a log view and GL debug message helpers."""

__version__ = "0.1.0"