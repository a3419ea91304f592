"""Dashboard statistics for the local meal log."""

from datetime import UTC, date, datetime, timedelta

from nutri_snap.domain.meals import MealRecord
from nutri_snap.domain.stats import DayScore

DASHBOARD_DAYS = 7


def weekly_scores(meals: list[MealRecord], today: date | None = None) -> list[DayScore]:
    """Return average health scores for the last seven UTC days, oldest first."""
    end = today or datetime.now(tz=UTC).date()
    by_day: dict[date, list[int]] = {}
    for meal in meals:
        by_day.setdefault(_utc_day(meal.date), []).append(meal.health_score)

    scores = []
    for offset in range(DASHBOARD_DAYS - 1, -1, -1):
        day = end - timedelta(days=offset)
        day_scores = by_day.get(day)
        average = sum(day_scores) / len(day_scores) if day_scores else None
        scores.append(DayScore(day=day, label=day.strftime("%a"), score=average))
    return scores


def _utc_day(moment: datetime) -> date:
    return moment.astimezone(UTC).date()
