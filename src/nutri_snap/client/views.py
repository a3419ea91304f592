"""Navigation state and text rendering for the client views."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from nutri_snap.domain.analysis import MealAnalysis
from nutri_snap.domain.meals import MealRecord
from nutri_snap.domain.stats import DayScore
from nutri_snap.services.meals import MealLogService
from nutri_snap.services.stats import weekly_scores

APP_TITLE = "Nutri-Snap"
SCORE_SCALE = 10


class Page(Enum):
    """Views the client can show."""

    LANDING = "landing"
    UPLOAD = "upload"
    RESULTS = "results"
    DASHBOARD = "dashboard"


@dataclass(frozen=True)
class PendingAnalysis:
    """Analysis waiting to be saved, with its image reference."""

    analysis: MealAnalysis
    image_url: str | None


@dataclass
class NutriSnapApp:
    """Single navigation state plus the data each view needs."""

    meal_log_service: MealLogService
    page: Page = Page.LANDING
    pending: PendingAnalysis | None = None
    meal_log: list[MealRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.meal_log_service.ensure_user_key()
        self.meal_log = self.meal_log_service.load_meal_log()

    def start_app(self) -> None:
        self.page = Page.UPLOAD

    def go_to_upload(self) -> None:
        self.page = Page.UPLOAD

    def go_to_log(self) -> None:
        self.page = Page.DASHBOARD

    def go_to_landing(self) -> None:
        self.page = Page.LANDING

    def meal_analyzed(self, analysis: MealAnalysis, image_url: str | None) -> None:
        """Hold a fresh analysis and show its results."""
        self.pending = PendingAnalysis(analysis=analysis, image_url=image_url)
        self.page = Page.RESULTS

    def save_to_log(self) -> MealRecord:
        """Persist the pending analysis and show the dashboard."""
        if self.pending is None:
            raise RuntimeError("No analysis to save")
        record = self.meal_log_service.save_meal(
            self.pending.analysis, self.pending.image_url
        )
        self.meal_log = self.meal_log_service.load_meal_log()
        self.page = Page.DASHBOARD
        return record

    def delete_meal(self, meal_id: str) -> None:
        self.meal_log = self.meal_log_service.delete_meal(meal_id)

    def render(self, today: date | None = None) -> str:
        """Render the current page as text."""
        if self.page is Page.LANDING:
            return render_landing(self.meal_log_service.has_saved_meals())
        if self.page is Page.UPLOAD:
            return render_upload()
        if self.page is Page.RESULTS:
            if self.pending is None:
                return render_upload()
            return render_results(self.pending.analysis)
        return render_dashboard(self.meal_log, today)


def render_landing(has_saved_meals: bool) -> str:
    lines = [APP_TITLE]
    if has_saved_meals:
        lines.append("[Upload]  [My Log]")
    else:
        lines.append("[Analyze Your First Meal]")
    lines.extend(
        [
            "",
            "Stop Guessing. Start Knowing.",
            "Snap a photo of your meal. Get an instant health score, calorie count,",
            "and healthier alternatives. No sign-up required.",
            "",
            "1. Upload your meal  2. Get AI analysis  3. Track your progress",
        ]
    )
    return "\n".join(lines)


def render_upload() -> str:
    return "\n".join(
        [
            "Upload a meal photo",
            "Run: nutri-snap analyze PATH/TO/PHOTO.jpg [--save]",
        ]
    )


def render_results(analysis: MealAnalysis) -> str:
    """Render the analysis of a single meal."""
    lines = [
        f"Health score: {analysis.health_score} / {SCORE_SCALE}",
        f"Total calories: {_format_number(analysis.total_calories)} kcal",
        "",
        "Health analysis:",
        analysis.health_analysis,
        "",
        "Identified items:",
    ]
    for item in analysis.food_items:
        lines.append(
            f"- {item.item_name}: {_format_number(item.estimated_calories)} kcal "
            f"({_format_number(item.estimated_grams)}g)"
        )
    lines.append("")
    lines.append("Healthier alternatives:")
    if not analysis.healthy_alternatives:
        lines.append("- None suggested.")
    for alternative in analysis.healthy_alternatives:
        lines.append(
            f'- Replace "{alternative.original_item}" with: {alternative.suggestion}'
        )
    return "\n".join(lines)


def render_dashboard(meals: list[MealRecord], today: date | None = None) -> str:
    """Render the seven-day progress chart and the full meal log."""
    lines = ["Your 7-Day Progress"]
    if not meals:
        lines.append("Your log is empty. Analyze a meal to see your progress!")
        return "\n".join(lines)

    lines.extend(_render_chart(weekly_scores(meals, today)))
    lines.append("")
    lines.append("Full Meal Log")
    for meal in meals:
        items = ", ".join(item.item_name for item in meal.food_items)
        lines.append(
            f"- {meal.date.strftime('%A, %b %d')}: {items} | "
            f"{meal.health_score}/{SCORE_SCALE} Score | "
            f"{_format_number(meal.total_calories)} kcal | id {meal.id}"
        )
    return "\n".join(lines)


def _render_chart(scores: list[DayScore]) -> list[str]:
    rows = []
    for entry in scores:
        if entry.score is None:
            rows.append(f"{entry.label} | -")
            continue
        bar = "#" * round(entry.score)
        rows.append(f"{entry.label} | {bar} {entry.score:.1f}")
    return rows


def _format_number(value: float) -> str:
    return f"{value:.0f}" if float(value).is_integer() else f"{value:.1f}"
