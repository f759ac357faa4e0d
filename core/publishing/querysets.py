"""
Publishing — QuerySet & Manager
=================================
Collection filters for models that opted in through the
PublishedByPeriod mixin. The field names come from the period stored
on the model class, so custom start/end names work unchanged.
"""

from __future__ import annotations

from typing import Optional

from django.db import models

from core.publishing.period import period_for


class PublishedByPeriodQuerySet(models.QuerySet):

    def in_published_period(self, start_at=None, end_at=None):
        """
        Records published at the reference instants.

        ``start_at`` defaults to now, ``end_at`` to ``start_at``.
        """
        return period_for(self.model).in_published_period(self, start_at, end_at)

    def out_published_period(self, start_at=None, end_at=None):
        return period_for(self.model).out_published_period(self, start_at, end_at)

    def recent(self, how_many: Optional[int] = None):
        return period_for(self.model).recent(self, how_many)

    def upcoming(self, how_many: Optional[int] = None):
        return period_for(self.model).upcoming(self, how_many)


PublishedByPeriodManager = models.Manager.from_queryset(
    PublishedByPeriodQuerySet, "PublishedByPeriodManager"
)
