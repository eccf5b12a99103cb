"""Configuration errors raised when a sampler is built from a bad table."""


class ConfigurationError(ValueError):
    """Base class for every rejected outcome/weight table."""


class MissingTableError(ConfigurationError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Parameter {field} cannot be None")


class EmptyTableError(ConfigurationError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Parameter {field} must not be empty")


class LengthMismatchError(ConfigurationError):
    def __init__(self, num_outcomes: int, num_weights: int) -> None:
        self.num_outcomes = num_outcomes
        self.num_weights = num_weights
        super().__init__(
            "Parameters outcomes and weights must be of the same length, "
            f"got {num_outcomes} outcomes and {num_weights} weights"
        )


class InvalidWeightError(ConfigurationError):
    """A weight is negative, infinite or NaN."""

    def __init__(self, index: int, value: float) -> None:
        self.index = index
        self.value = value
        super().__init__(
            f"Weight at index {index} must be finite and non-negative, got {value}"
        )


class ProbabilitySumError(ConfigurationError):
    """The weights do not add up to 1.0 within the tolerance margin."""

    def __init__(self, total: float, margin: float) -> None:
        self.total = total
        self.margin = margin
        super().__init__(
            "Parameter weights is invalid. Contained elements should "
            f"approximately add up to 1.0 (margin {margin:g}), but are {total:g}"
        )
