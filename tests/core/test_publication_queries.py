"""
Tests for the collection filters: PublishedByPeriodQuerySet and the
Q builders on PublicationPeriod.
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from django.db.models import Q

from core.publishing import configure
from tests.publishing_app.models import Announcement, Issue, Post

pytestmark = pytest.mark.django_db

NOW = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
DAY = timedelta(days=1)


@pytest.fixture
def posts(fixed_clock):
    specs = {
        "live": (NOW - DAY, None),
        "bounded": (NOW - timedelta(hours=3), NOW + DAY),
        "expired": (NOW - 2 * DAY, NOW - DAY),
        "future": (NOW + DAY, None),
        "later": (NOW + 3 * DAY, NOW + 10 * DAY),
        "never": (None, None),
        "never_with_end": (None, NOW + DAY),
    }
    return {
        title: Post.objects.create(title=title, publish_start=start, publish_end=end)
        for title, (start, end) in specs.items()
    }


def _titles(queryset) -> set:
    return set(queryset.values_list("title", flat=True))


class TestInPublishedPeriod:
    def test_defaults_to_now(self, posts):
        assert _titles(Post.objects.in_published_period()) == {"live", "bounded"}

    def test_explicit_reference(self, posts):
        assert _titles(Post.objects.in_published_period(NOW + 2 * DAY)) == {
            "live",
            "future",
        }

    def test_explicit_end_reference(self, posts):
        assert _titles(
            Post.objects.in_published_period(NOW, NOW + timedelta(hours=12))
        ) == {"live", "bounded"}
        assert _titles(Post.objects.in_published_period(NOW, NOW + 2 * DAY)) == {
            "live"
        }

    def test_unset_start_never_matches(self, posts):
        titles = _titles(Post.objects.in_published_period(NOW + 100 * DAY))
        assert "never" not in titles
        assert "never_with_end" not in titles

    def test_matches_instance_predicate(self, posts):
        expected = {title for title, post in posts.items() if post.in_published_period()}
        assert _titles(Post.objects.in_published_period()) == expected

    def test_naive_reference_agrees_with_instances(self, posts):
        naive_now = datetime(2025, 6, 15, 12, 0)
        expected = {
            title for title, post in posts.items() if post.in_published_period(naive_now)
        }
        assert _titles(Post.objects.in_published_period(naive_now)) == expected
        assert expected == {"live", "bounded"}

    def test_chains_with_other_filters(self, posts):
        qs = Post.objects.filter(title__startswith="b").in_published_period()
        assert _titles(qs) == {"bounded"}


class TestOutPublishedPeriod:
    def test_defaults_to_now(self, posts):
        assert _titles(Post.objects.out_published_period()) == {
            "expired",
            "future",
            "later",
        }

    def test_is_not_a_partition(self, posts):
        in_period = _titles(Post.objects.in_published_period())
        out_period = _titles(Post.objects.out_published_period())

        assert not in_period & out_period
        assert set(posts) - (in_period | out_period) == {"never", "never_with_end"}

    def test_explicit_reference(self, posts):
        assert _titles(Post.objects.out_published_period(NOW + 2 * DAY)) == {
            "bounded",
            "expired",
            "later",
            "never_with_end",
        }


class TestRecentAndUpcoming:
    def test_recent_orders_newest_first(self, posts):
        assert list(Post.objects.recent().values_list("title", flat=True)) == [
            "bounded",
            "live",
        ]

    def test_recent_limit(self, posts):
        assert [post.title for post in Post.objects.recent(1)] == ["bounded"]

    def test_upcoming_orders_soonest_first(self, posts):
        assert list(Post.objects.upcoming().values_list("title", flat=True)) == [
            "future",
            "later",
        ]

    def test_upcoming_limit(self, posts):
        assert [post.title for post in Post.objects.upcoming(1)] == ["future"]


class TestCustomFields:
    def test_announcements(self, fixed_clock):
        Announcement.objects.create(headline="on", live_from=NOW - DAY)
        Announcement.objects.create(headline="off", live_from=NOW - DAY, live_until=NOW - timedelta(hours=1))
        Announcement.objects.create(headline="draft")

        assert list(
            Announcement.objects.in_published_period().values_list("headline", flat=True)
        ) == ["on"]
        assert list(
            Announcement.objects.out_published_period().values_list("headline", flat=True)
        ) == ["off"]

    def test_date_fields(self, fixed_clock):
        Issue.objects.create(number=1, on_sale=date(2025, 6, 1), off_sale=date(2025, 6, 15))
        Issue.objects.create(number=2, on_sale=date(2025, 6, 1), off_sale=date(2025, 6, 14))
        Issue.objects.create(number=3, on_sale=date(2025, 6, 16))

        assert list(Issue.objects.in_published_period().values_list("number", flat=True)) == [1]
        assert sorted(
            Issue.objects.out_published_period().values_list("number", flat=True)
        ) == [2, 3]
        assert list(Issue.objects.upcoming().values_list("number", flat=True)) == [3]


class TestQBuilders:
    def test_in_period_q_composes(self, posts):
        period = configure(Post)
        qs = Post.objects.filter(period.in_period_q() & ~Q(title="live"))
        assert _titles(qs) == {"bounded"}

    def test_out_period_q_composes(self, posts):
        period = configure(Post)
        qs = Post.objects.filter(period.out_period_q() | Q(title="never"))
        assert _titles(qs) == {"expired", "future", "later", "never"}

    def test_evaluator_uses_default_manager(self, posts):
        period = configure(Post)
        assert _titles(period.in_published_period()) == {"live", "bounded"}
        assert _titles(period.out_published_period(NOW, NOW)) == {
            "expired",
            "future",
            "later",
        }
