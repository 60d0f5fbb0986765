from datetime import datetime, timedelta
from typing import List
import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AggregationFailure
from app.schemas.analytics import (
    CountPercentage,
    DashboardAnalytics,
    GenderDistribution,
    RetentionBreakdown,
    WeeklyAttendance,
)
from app.schemas.contact import ContactFilter, DateRange, GenderEnum
from app.services.stores import AttendanceStore, ContactStore, SqlAttendanceStore, SqlContactStore
from app.utils.datetime_utils import end_of_day, ensure_utc, start_of_day

logger = logging.getLogger(__name__)


def percentage(numerator: int, denominator: int) -> float:
    """Share of denominator in percent; 0 when there is nothing to divide by"""
    return 100 * numerator / denominator if denominator > 0 else 0.0


def count_percentage(count: int, denominator: int) -> CountPercentage:
    return CountPercentage(count=count, percentage=percentage(count, denominator))


def weekly_buckets(now: datetime, week_count: int) -> List[DateRange]:
    """
    Contiguous 7-day windows ending today, oldest first.

    Each window runs from 00:00:00 of its first day to 23:59:59.999999 of its
    last day; the next window starts at the following midnight.
    """
    today = start_of_day(now)
    buckets = []
    for i in range(week_count - 1, -1, -1):
        week_end = end_of_day(today - timedelta(days=i * 7))
        week_start = start_of_day(week_end - timedelta(days=6))
        buckets.append(DateRange(start=week_start, end=week_end))
    return buckets


class AnalyticsService:
    """Dashboard aggregation over contact and attendance stores.

    Stateless: every figure is derived from the stores and the ``now`` passed
    to :meth:`compute_dashboard_analytics`, so repeated calls with unchanged
    data return identical reports.
    """

    def __init__(
        self,
        contact_store: ContactStore,
        attendance_store: AttendanceStore,
        still_attending_days: int = 35,
        trend_weeks: int = 10,
        retention_weeks: int = 5,
    ):
        self.contacts = contact_store
        self.attendance = attendance_store
        self.still_attending_days = still_attending_days
        self.trend_weeks = trend_weeks
        self.retention_weeks = retention_weeks

    @classmethod
    def for_session(cls, db: Session) -> "AnalyticsService":
        return cls(
            SqlContactStore(db),
            SqlAttendanceStore(db),
            still_attending_days=settings.STILL_ATTENDING_DAYS,
            trend_weeks=settings.TREND_WEEKS,
            retention_weeks=settings.RETENTION_WEEKS,
        )

    def compute_dashboard_analytics(self, now: datetime) -> DashboardAnalytics:
        """Build the full dashboard report relative to ``now``.

        Any store failure aborts the whole report with AggregationFailure.
        """
        now = ensure_utc(now)
        try:
            return self._compute(now)
        except AggregationFailure:
            raise
        except Exception as e:
            logger.error(f"Dashboard analytics failed: {e}")
            raise AggregationFailure() from e

    def _compute(self, now: datetime) -> DashboardAnalytics:
        window_start = now - timedelta(days=self.still_attending_days)

        total_contacts = self.contacts.count()

        # Anyone with an attendance record, whatever its date or attended flag
        attended_at_least_once = len(self.attendance.distinct_contact_ids())

        # Open-ended: records dated after now still count as recent
        still_attending = len(self.attendance.distinct_contact_ids(
            date_range=DateRange(start=window_start),
            attended=True,
        ))

        male_count = self.contacts.count(ContactFilter(gender=GenderEnum.male))
        female_count = self.contacts.count(ContactFilter(gender=GenderEnum.female))

        report = DashboardAnalytics(
            total_contacts=total_contacts,
            attended_at_least_once=count_percentage(attended_at_least_once, total_contacts),
            still_attending=count_percentage(still_attending, total_contacts),
            weekly_attendance_trend=self.compute_weekly_trend(now, self.trend_weeks),
            gender_distribution=GenderDistribution(
                male=count_percentage(male_count, total_contacts),
                female=count_percentage(female_count, total_contacts),
            ),
            retention_breakdown=self.compute_retention(now, self.retention_weeks),
        )
        logger.debug(
            f"Dashboard analytics computed for {now.isoformat()}: "
            f"{total_contacts} contacts, {attended_at_least_once} ever attended"
        )
        return report

    def compute_weekly_trend(self, now: datetime, week_count: int) -> List[WeeklyAttendance]:
        """Attended=true records per trailing week, week 1 being the oldest"""
        return [
            WeeklyAttendance(week=index, count=self.attendance.count_where(bucket, attended=True))
            for index, bucket in enumerate(weekly_buckets(ensure_utc(now), week_count), start=1)
        ]

    def compute_retention(self, now: datetime, weeks: int) -> RetentionBreakdown:
        """How many of the period's first-week attendees came back in the last 7 days"""
        now = ensure_utc(now)
        period_start = now - timedelta(days=weeks * 7)
        first_week = DateRange(start=period_start, end=period_start + timedelta(days=7), inclusive_end=False)

        cohort = self.attendance.distinct_contact_ids(date_range=first_week, attended=True)
        if not cohort:
            return RetentionBreakdown.empty()

        recent_week = DateRange(start=now - timedelta(days=7), end=now)
        returned = self.attendance.distinct_contact_ids(
            date_range=recent_week,
            attended=True,
            contact_id_in=cohort,
        )

        still_attending = len(returned)
        drop_out = len(cohort) - still_attending
        return RetentionBreakdown(
            still_attending=count_percentage(still_attending, len(cohort)),
            drop_out=count_percentage(drop_out, len(cohort)),
        )
