"""Stage QC engines: stage geometry, overlay projection and media dimension checks."""

__version__ = "0.1.0"
