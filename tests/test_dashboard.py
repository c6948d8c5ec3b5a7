"""Unit tests for conference.services.dashboard aggregations."""

import unittest

from conference.schemas.reviewer import ReviewerApplication
from conference.services import dashboard, registration, reviewers

from tests.support import DatabaseTestCase, make_account, participant_details


def _application(name: str) -> ReviewerApplication:
    return ReviewerApplication(
        full_name=name,
        email=f"{name.lower().replace(' ', '.')}@uni.example.org",
        affiliation="University",
        expertise=["Machine Learning"],
    )


class TestEmptyDashboard(DatabaseTestCase):
    def test_payment_stats_empty(self) -> None:
        stats = dashboard.payment_stats(self.db)
        self.assertEqual(stats.total_participants, 0)
        self.assertEqual(stats.completion_rate, 0.0)

    def test_overview_empty(self) -> None:
        overview = dashboard.overview_stats(self.db)
        self.assertEqual(overview.total_participants, 0)
        self.assertEqual(overview.total_reviewers, 0)

    def test_countries_and_activity_empty(self) -> None:
        self.assertEqual(dashboard.countries_distribution(self.db), [])
        activity = dashboard.recent_activity(self.db)
        self.assertEqual(activity.recent_participants, [])
        self.assertEqual(activity.recent_reviewers, [])


class TestPopulatedDashboard(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        seeds = [
            ("onsite-paper", "Egypt", "completed"),
            ("onsite-paper", "Egypt", "pending"),
            ("online-paper", "France", "completed"),
            ("attendance", "Egypt", "cancelled"),
            ("attendance", "Japan", "pending"),
            ("attendance", "France", "completed"),
        ]
        for i, (reg_type, country, status) in enumerate(seeds):
            account = make_account(self.db, email=f"p{i}@example.com")
            record = registration.register(
                self.db, account.id, participant_details(registration_type=reg_type, country=country)
            )
            if status != "pending":
                registration.update_payment(self.db, record.id, status, allow_corrections=False)
        first = reviewers.apply(self.db, _application("Alan Turing"))
        reviewers.apply(self.db, _application("Grace Hopper"))
        third = reviewers.apply(self.db, _application("Barbara Liskov"))
        reviewers.set_status(self.db, first.id, "approved")
        reviewers.set_status(self.db, third.id, "rejected", reason="Out of scope")

    def test_participant_stats(self) -> None:
        stats = dashboard.participant_stats(self.db)
        self.assertEqual(stats.total_participants, 6)
        self.assertEqual(stats.onsite_with_paper, 2)
        self.assertEqual(stats.online_with_paper, 1)
        self.assertEqual(stats.attendance_only, 3)
        self.assertEqual(stats.payment_completed, 3)

    def test_payment_stats(self) -> None:
        stats = dashboard.payment_stats(self.db)
        self.assertEqual(stats.payment_completed, 3)
        self.assertEqual(stats.payment_pending, 2)
        self.assertEqual(stats.payment_cancelled, 1)
        self.assertEqual(stats.completion_rate, 50.0)

    def test_reviewer_stats(self) -> None:
        stats = dashboard.reviewer_stats(self.db)
        self.assertEqual((stats.pending, stats.approved, stats.rejected), (1, 1, 1))

    def test_overview(self) -> None:
        overview = dashboard.overview_stats(self.db)
        self.assertEqual(overview.total_participants, 6)
        self.assertEqual(overview.paid_participants, 3)
        self.assertEqual(overview.online_participants, 1)
        self.assertEqual(overview.onsite_participants, 2)
        self.assertEqual(overview.total_reviewers, 3)
        self.assertEqual(overview.pending_reviewers, 1)

    def test_countries_sorted_by_count(self) -> None:
        rows = dashboard.countries_distribution(self.db)
        self.assertEqual(
            [(r.country, r.count) for r in rows],
            [("Egypt", 3), ("France", 2), ("Japan", 1)],
        )

    def test_countries_limit(self) -> None:
        rows = dashboard.countries_distribution(self.db, limit=1)
        self.assertEqual([r.country for r in rows], ["Egypt"])
        self.assertEqual(len(dashboard.countries_distribution(self.db, limit=0)), 1)

    def test_recent_activity_limit(self) -> None:
        activity = dashboard.recent_activity(self.db, limit=2)
        self.assertEqual(len(activity.recent_participants), 2)
        self.assertEqual(len(activity.recent_reviewers), 2)

    def test_rate_rounded_to_two_places(self) -> None:
        account = make_account(self.db, email="extra@example.com")
        registration.register(self.db, account.id, participant_details())
        self.assertEqual(dashboard.payment_stats(self.db).completion_rate, 42.86)


if __name__ == "__main__":
    unittest.main()
