"""OCT plugin framework: acquisition systems, extensions, window functions, a trackball and a virtual OCT system."""

__version__ = "0.1.0"