"""pi-gen action - Build custom Raspberry Pi images with pi-gen.

This package assembles the pi-gen config file from user options, validates
those options against the host environment, and drives pi-gen's Docker
build script.
"""

__version__ = "1.5.0"
__all__ = ["__version__"]
