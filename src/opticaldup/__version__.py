"""Version information for opticaldup."""

__version__ = "0.3.0"
__license__ = "GPL-2.0"
__description__ = "Optical duplicate detection from read-name tile/x/y coordinates"
