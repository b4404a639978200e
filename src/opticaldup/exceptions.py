"""Custom exceptions for opticaldup."""


class OpticalDupError(Exception):
    """Base exception for all opticaldup errors."""

    pass


class ConfigurationError(OpticalDupError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(OpticalDupError):
    """Raised when input data validation fails."""

    pass


class FileFormatError(OpticalDupError):
    """Raised when an input table cannot be read or has the wrong layout."""

    def __init__(self, message="", path=None):
        """Initialize FileFormatError with the offending path.

        Args:
            message: Error message
            path: Path of the file that failed to load
        """
        super().__init__(message)
        self.path = path
