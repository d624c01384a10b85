"""Errors raised by the application layer. The calculation core never raises."""

from bmi_tracker.models import ValidationOutcome


class TrackerError(Exception):
    """Base class for BMI tracker errors."""


class ValidationFailed(TrackerError):
    """Form input was rejected; ``outcome.message`` is safe to show the user."""

    def __init__(self, outcome: ValidationOutcome):
        super().__init__(outcome.message)
        self.outcome = outcome


class RemoteStoreError(TrackerError):
    """The hosted backend could not be reached or rejected a request."""
