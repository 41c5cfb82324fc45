class PathvizError(Exception):
    """Base class for every error raised by the search engine."""


class InvalidEndpointError(PathvizError, ValueError):
    """Start or goal lies outside the space or on a blocked cell."""

    def __init__(self, role: str, coord, reason: str):
        self.role = role
        self.coord = coord
        self.reason = reason
        super().__init__(f"{role} {coord} is {reason}")


class UnknownAlgorithmError(PathvizError, ValueError):
    """Algorithm id outside the supported set."""

    def __init__(self, name: str, available):
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown algorithm: '{name}'. Available: {self.available}")


class RunStateError(PathvizError, RuntimeError):
    """Illegal transition of the run-state machine."""


class SearchCancelled(PathvizError):
    """Raised at a suspension point once the run has been cancelled."""
