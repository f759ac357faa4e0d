"""
Publishing — Model Mixins
===========================
Opt-in composition for publishable models.

    class Post(PublishedByPeriodModel):
        title = models.CharField(max_length=255)

    class Announcement(PublishedByPeriod, models.Model):
        publish_start_field = "live_from"
        publish_end_field = "live_until"
        live_from = models.DateTimeField(null=True)
        live_until = models.DateTimeField(null=True)
        objects = PublishedByPeriodManager()

Only subclasses of PublishedByPeriod are touched. Their fields are
validated once, when Django prepares the class, so a misconfigured
model fails at import with ConfigurationError.
"""

from __future__ import annotations

import logging

from django.apps import apps
from django.db import models
from django.db.models.signals import class_prepared
from django.dispatch import receiver

from core.publishing.period import configure, period_for
from core.publishing.querysets import PublishedByPeriodManager

logger = logging.getLogger("publishing.models")


class PublishedByPeriod:
    """
    Instance and class-level publication helpers for a Django model.

    None means "use settings.PUBLISHED_BY_PERIOD or the defaults".
    """

    publish_start_field = None
    publish_end_field = None

    @classmethod
    def publication_period(cls):
        return period_for(cls)

    def in_published_period(self, at=None) -> bool:
        return self.publication_period().is_in_published_period(self, at)

    def out_published_period(self, at=None) -> bool:
        return self.publication_period().is_out_of_published_period(self, at)

    def publish_by_period(self, start_at=None, end_at=None) -> bool:
        return self.publication_period().publish_by_period(self, start_at, end_at)

    def publish_by_period_and_save(self, start_at=None, end_at=None) -> bool:
        return self.publication_period().publish_by_period_and_save(
            self, start_at, end_at
        )

    def unpublish(self) -> bool:
        return self.publication_period().unpublish(self)

    def unpublish_and_save(self) -> bool:
        return self.publication_period().unpublish_and_save(self)


class PublishedByPeriodModel(PublishedByPeriod, models.Model):
    publish_start_field = "publish_start"
    publish_end_field = "publish_end"

    publish_start = models.DateTimeField(null=True, blank=True, db_index=True)
    publish_end = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = PublishedByPeriodManager()

    class Meta:
        abstract = True


@receiver(class_prepared)
def attach_publication_period(sender, **kwargs) -> None:
    if not issubclass(sender, PublishedByPeriod):
        return
    # Historical models rendered from migration state live in their own
    # registry and lose the subclass attributes naming the fields.
    if sender._meta.apps is not apps:
        return
    sender._publication_period = configure(
        sender,
        start=sender.publish_start_field,
        end=sender.publish_end_field,
    )
    logger.debug("Prepared publishable model %s.", sender._meta.label)
