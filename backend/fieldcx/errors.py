"""
Exceptions raised by the test result computation engine.

Both subclass ValueError so the API layer maps them to 422 alongside
pydantic validation failures.
"""


class UnknownTestTypeError(ValueError):
    """Raised when a test type discriminant is not one of the known values."""

    def __init__(self, test_type):
        self.test_type = test_type
        super().__init__(f"Unknown test type: {test_type}")


class ReadingMismatchError(ValueError):
    """Raised when a typed reading does not belong to the requested test type."""
