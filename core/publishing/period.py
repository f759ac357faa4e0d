"""
Publishing — Publication Period Evaluator
===========================================
Decides whether a record is published from two date/datetime fields:

    published  <=>  start is set
                    AND start <= at
                    AND (end is unset OR end >= at)

One PublicationPeriod is built per model by configure(). It holds the
two field names and offers:
- instance predicates (is_in_published_period / is_out_of_published_period)
- mutators (publish_by_period, unpublish and their *_and_save variants)
- Q builders and queryset filters for bulk selection

The evaluator keeps no state about records. Every call reads the
record's two attributes again.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Tuple

from django.conf import settings
from django.core.exceptions import FieldDoesNotExist
from django.db import models
from django.db.models import Q
from django.utils import timezone

from core.publishing.errors import (
    InvalidPeriodFieldError,
    MissingPeriodFieldError,
    PeriodNotConfiguredError,
)
from core.time import PublicationWindow, get_default_clock

logger = logging.getLogger("publishing.period")

DEFAULT_START_FIELD = "publish_start"
DEFAULT_END_FIELD = "publish_end"


def default_field_names() -> Tuple[str, str]:
    """Field names from settings.PUBLISHED_BY_PERIOD, else the defaults."""
    options = getattr(settings, "PUBLISHED_BY_PERIOD", None) or {}
    return (
        options.get("START_FIELD", DEFAULT_START_FIELD),
        options.get("END_FIELD", DEFAULT_END_FIELD),
    )


def _is_date_only(field: models.Field) -> bool:
    return isinstance(field, models.DateField) and not isinstance(
        field, models.DateTimeField
    )


def _resolve_field(model, field_name: str) -> models.Field:
    try:
        field = model._meta.get_field(field_name)
    except FieldDoesNotExist as exc:
        raise MissingPeriodFieldError(model, field_name) from exc

    # DateTimeField subclasses DateField.
    if not isinstance(field, models.DateField):
        raise InvalidPeriodFieldError(
            model,
            field_name,
            f"expected DateField or DateTimeField, got {type(field).__name__}.",
        )
    return field


# ══════════════════════════════════════════════════════════════
# CONFIGURATION
# ══════════════════════════════════════════════════════════════

def configure(
    model,
    *,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> Optional[PublicationPeriod]:
    """
    Build the publication period for ``model``.

    Returns None for abstract models (no table to filter or save).
    Raises ConfigurationError when either field is missing or is not a
    date/datetime field.
    """
    if model._meta.abstract:
        logger.debug(
            "Skipping publication period for abstract model %s.",
            model.__qualname__,
        )
        return None

    default_start, default_end = default_field_names()
    start_field = _resolve_field(model, start or default_start)
    end_field = _resolve_field(model, end or default_end)

    if _is_date_only(start_field) != _is_date_only(end_field):
        raise InvalidPeriodFieldError(
            model,
            end_field.name,
            f"must be the same kind of field as '{start_field.name}' "
            "(both DateField or both DateTimeField).",
        )

    period = PublicationPeriod(
        model,
        start_field=start_field.name,
        end_field=end_field.name,
        date_only=_is_date_only(start_field),
    )
    logger.debug("Configured %r.", period)
    return period


def period_for(model) -> PublicationPeriod:
    """Return the period stored on a prepared model class."""
    period = getattr(model, "_publication_period", None)
    if period is None:
        raise PeriodNotConfiguredError(model)
    return period


# ══════════════════════════════════════════════════════════════
# EVALUATOR
# ══════════════════════════════════════════════════════════════

class PublicationPeriod:
    """Publication window rules bound to one model's start/end fields."""

    def __init__(
        self,
        model,
        *,
        start_field: str = DEFAULT_START_FIELD,
        end_field: str = DEFAULT_END_FIELD,
        date_only: bool = False,
        clock=None,
    ) -> None:
        self.model = model
        self.start_field = start_field
        self.end_field = end_field
        self.date_only = date_only
        self._clock = clock

    def __repr__(self) -> str:
        return (
            f"<PublicationPeriod {self.model.__qualname__} "
            f"[{self.start_field}, {self.end_field}]>"
        )

    # ── Reference instants ───────────────────────────────────

    @property
    def clock(self):
        return self._clock if self._clock is not None else get_default_clock()

    def reference(self, value=None):
        """
        Normalize a reference instant to the kind of the period fields.

        None means now (or today for date fields). A datetime is reduced
        to its local date for date fields; a plain date becomes midnight
        for datetime fields. Naive datetimes are made aware in the current
        time zone when USE_TZ is on.
        """
        if value is None:
            value = self.clock.today() if self.date_only else self.clock.now()
        return self._coerce(value)

    def _coerce(self, value):
        if self.date_only:
            if isinstance(value, datetime):
                if timezone.is_aware(value):
                    return timezone.localdate(value)
                return value.date()
            return value

        if isinstance(value, date) and not isinstance(value, datetime):
            value = datetime.combine(value, time.min)
        if settings.USE_TZ and timezone.is_naive(value):
            value = timezone.make_aware(value)
        return value

    # ── Instance predicates ──────────────────────────────────

    def window(self, record) -> PublicationWindow:
        start = getattr(record, self.start_field)
        end = getattr(record, self.end_field)
        return PublicationWindow(
            start=None if start is None else self._coerce(start),
            end=None if end is None else self._coerce(end),
        )

    def is_in_published_period(self, record, at=None) -> bool:
        return self.window(record).contains(self.reference(at))

    def is_out_of_published_period(self, record, at=None) -> bool:
        return self.window(record).excludes(self.reference(at))

    # ── Mutators ─────────────────────────────────────────────

    def publish_by_period(self, record, start_at=None, end_at=None) -> bool:
        """
        Open the record's publication window at ``start_at``.

        Already-published records are left untouched so repeated calls do
        not re-stamp the start. Returns True when the fields were set.
        Nothing is saved.
        """
        start_at = self.reference(start_at)
        if self.is_in_published_period(record, start_at):
            logger.debug(
                "%s pk=%s already in published period at %s.",
                self.model.__qualname__,
                record.pk,
                start_at,
            )
            return False

        setattr(record, self.start_field, start_at)
        setattr(
            record,
            self.end_field,
            None if end_at is None else self.reference(end_at),
        )
        return True

    def publish_by_period_and_save(self, record, start_at=None, end_at=None) -> bool:
        changed = self.publish_by_period(record, start_at, end_at)
        if changed:
            record.save()
            logger.info(
                "Published %s pk=%s from %s until %s.",
                self.model.__qualname__,
                record.pk,
                getattr(record, self.start_field),
                getattr(record, self.end_field),
            )
        return changed

    def unpublish(self, record) -> bool:
        """Clear both fields. Returns True if either was set."""
        changed = (
            getattr(record, self.start_field) is not None
            or getattr(record, self.end_field) is not None
        )
        setattr(record, self.start_field, None)
        setattr(record, self.end_field, None)
        return changed

    def unpublish_and_save(self, record) -> bool:
        changed = self.unpublish(record)
        if changed:
            record.save()
            logger.info(
                "Unpublished %s pk=%s.", self.model.__qualname__, record.pk
            )
        return changed

    # ── Query filters ────────────────────────────────────────

    def _references(self, start_at, end_at):
        start_at = self.reference(start_at)
        end_at = start_at if end_at is None else self.reference(end_at)
        return start_at, end_at

    def in_period_q(self, start_at=None, end_at=None) -> Q:
        start_at, end_at = self._references(start_at, end_at)
        start, end = self.start_field, self.end_field
        return (
            Q(**{f"{start}__isnull": False})
            & Q(**{f"{start}__lte": start_at})
            & (Q(**{f"{end}__isnull": True}) | Q(**{f"{end}__gte": end_at}))
        )

    def out_period_q(self, start_at=None, end_at=None) -> Q:
        """
        Records starting after ``start_at`` or ending before ``end_at``.

        Not the negation of in_period_q: a record with no start is never
        in period, and is out of period only when its end lies before
        ``end_at``. With no end either, it matches neither filter.
        """
        start_at, end_at = self._references(start_at, end_at)
        return Q(**{f"{self.start_field}__gt": start_at}) | Q(
            **{f"{self.end_field}__lt": end_at}
        )

    def _queryset(self, queryset):
        if queryset is None:
            return self.model._default_manager.all()
        return queryset

    def in_published_period(self, queryset=None, start_at=None, end_at=None):
        return self._queryset(queryset).filter(self.in_period_q(start_at, end_at))

    def out_published_period(self, queryset=None, start_at=None, end_at=None):
        return self._queryset(queryset).filter(self.out_period_q(start_at, end_at))

    def recent(self, queryset=None, how_many: Optional[int] = None):
        """Published records, most recently started first."""
        qs = self.in_published_period(queryset).order_by(f"-{self.start_field}")
        return qs if how_many is None else qs[:how_many]

    def upcoming(self, queryset=None, how_many: Optional[int] = None):
        """Records whose start lies in the future, soonest first."""
        qs = self._queryset(queryset).filter(
            **{f"{self.start_field}__gt": self.reference()}
        ).order_by(self.start_field)
        return qs if how_many is None else qs[:how_many]
