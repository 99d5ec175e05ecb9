"""Forecast service exceptions."""

from edi_dashboard.services.exceptions import ValidationError


class InvalidForecastBatch(ValidationError):
    """Raised when a forecast batch is structurally unusable."""
