"""
Publishing — Public API
=========================
Publication-by-period rules for Django models.

Model mixins live in core.publishing.models and are imported from
there, after the app registry is ready.
"""

from core.publishing.errors import (
    ConfigurationError,
    InvalidPeriodFieldError,
    MissingPeriodFieldError,
    PeriodNotConfiguredError,
)
from core.publishing.period import (
    DEFAULT_END_FIELD,
    DEFAULT_START_FIELD,
    PublicationPeriod,
    configure,
    period_for,
)

__all__ = [
    "ConfigurationError",
    "MissingPeriodFieldError",
    "InvalidPeriodFieldError",
    "PeriodNotConfiguredError",
    "PublicationPeriod",
    "configure",
    "period_for",
    "DEFAULT_START_FIELD",
    "DEFAULT_END_FIELD",
]
