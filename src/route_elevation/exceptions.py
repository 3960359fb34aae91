"""Custom exceptions for Route Elevation."""


class RouteElevationError(Exception):
    """Base exception for all application errors."""

    pass


class InsufficientPointsError(RouteElevationError, ValueError):
    """Raised when a track has fewer than two points.

    Attributes:
        count: Number of points that were supplied.
    """

    def __init__(self, count: int, details: str | None = None):
        """Initializes InsufficientPointsError.

        Args:
            count: Number of points that were supplied.
            details: Optional error message replacing the default one.
        """
        self.count = count
        super().__init__(details or f"Insufficient track points: need at least 2, got {count}")


class InvalidPointError(RouteElevationError, ValueError):
    """Raised when a track point has a non-finite coordinate or elevation.

    Attributes:
        index: Position of the offending point in the track.
    """

    def __init__(self, index: int, details: str):
        """Initializes InvalidPointError.

        Args:
            index: Position of the offending point in the track.
            details: Error details.
        """
        self.index = index
        super().__init__(f"Invalid track point at index {index}: {details}")


class ParsingError(RouteElevationError, ValueError):
    """Raised when GPX input cannot be parsed."""

    pass


class AnalysisError(RouteElevationError):
    """Wraps an unexpected internal failure during elevation analysis."""

    def __init__(self, cause: Exception):
        """Initializes AnalysisError.

        Args:
            cause: The original exception.
        """
        self.cause = cause
        super().__init__(f"Elevation analysis failed: {type(cause).__name__}: {cause}")
