from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CountPercentage(CamelModel):
    count: int = 0
    percentage: float = 0.0


class WeeklyAttendance(CamelModel):
    week: int
    count: int


class GenderDistribution(CamelModel):
    male: CountPercentage
    female: CountPercentage


class RetentionBreakdown(CamelModel):
    still_attending: CountPercentage
    drop_out: CountPercentage

    @classmethod
    def empty(cls) -> "RetentionBreakdown":
        return cls(still_attending=CountPercentage(), drop_out=CountPercentage())


# Complete dashboard response, serialized with camelCase keys
class DashboardAnalytics(CamelModel):
    total_contacts: int
    attended_at_least_once: CountPercentage
    still_attending: CountPercentage
    weekly_attendance_trend: List[WeeklyAttendance]
    gender_distribution: GenderDistribution
    retention_breakdown: RetentionBreakdown
