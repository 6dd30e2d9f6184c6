class AllocationError(Exception):
    """Base class for errors that abort an allocation run before any placement."""
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigError(AllocationError):
    """Raised when hall descriptors or run options are invalid."""


class CapacityError(AllocationError):
    """Raised when even the densest seating mode cannot hold the population."""
    def __init__(self, population: int, capacity: int):
        super().__init__(
            f"Insufficient seating capacity: {population} individuals, "
            f"{capacity} seats at maximum density",
            details={"population": population, "capacity": capacity},
        )
