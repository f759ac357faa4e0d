"""
Publishing — Errors
=====================
Raised at setup time when a model cannot carry a publication period.
Persistence failures from Model.save() are never wrapped here; they
reach the caller unchanged.
"""

from django.core.exceptions import ImproperlyConfigured


class ConfigurationError(ImproperlyConfigured):
    """Base error: the model is not usable as a publishable record."""
    pass


class MissingPeriodFieldError(ConfigurationError):
    """A required start/end field does not exist on the model."""

    def __init__(self, model, field_name: str):
        self.model = model
        self.field_name = field_name
        super().__init__(
            f"No '{field_name}' field available for PublishedByPeriod "
            f"on model {model._meta.label}."
        )


class InvalidPeriodFieldError(ConfigurationError):
    """A start/end field exists but cannot hold a date or datetime."""

    def __init__(self, model, field_name: str, detail: str):
        self.model = model
        self.field_name = field_name
        self.detail = detail
        super().__init__(
            f"Field '{field_name}' on model {model._meta.label} cannot be "
            f"used for PublishedByPeriod: {detail}"
        )


class PeriodNotConfiguredError(ConfigurationError):
    """Publication methods used on a model that was never configured."""

    def __init__(self, model):
        self.model = model
        super().__init__(
            f"Model {model.__qualname__} has no publication period. "
            "Abstract models are skipped; use a concrete subclass."
        )
