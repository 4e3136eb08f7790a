"""Domain exceptions raised by the estimator services."""


class EstimatorError(ValueError):
    """Base class for configuration errors the caller must fix."""


class WarrantyRateError(EstimatorError):
    """
    Raised when the warranty reserve is 100 % of the client price or more.

    Warranty is reverse-solved as ``pre_warranty / (1 - pct)``; at or above
    100 % that division has no finite answer.
    """
    def __init__(self, warranty_pct: float):
        self.warranty_pct = warranty_pct
        super().__init__(
            f"warranty percentage must be less than 100% (got {warranty_pct:g}%)"
        )


class UnknownPresetError(EstimatorError):
    """Raised when a rate preset name is not in the preset table."""
    def __init__(self, preset: str, available: list):
        self.preset = preset
        self.available = available
        super().__init__(
            f"unknown rate preset '{preset}'; expected one of {', '.join(available)}"
        )
