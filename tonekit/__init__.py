"""tonekit: perceptual color engine and image palette extraction."""

__version__ = '0.1.0'
