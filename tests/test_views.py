"""Tests for client navigation and rendering."""

from datetime import UTC, date, datetime

import pytest

from nutri_snap.client.views import (
    NutriSnapApp,
    Page,
    render_dashboard,
    render_landing,
    render_results,
)
from nutri_snap.domain.analysis import MealAnalysis
from nutri_snap.domain.meals import MealRecord
from nutri_snap.services.meals import MealLogService
from tests.conftest import sample_analysis_payload


def _analysis() -> MealAnalysis:
    return MealAnalysis.model_validate(sample_analysis_payload())


def test_app_starts_on_landing_and_creates_user_key(
    meal_log_service: MealLogService,
) -> None:
    app = NutriSnapApp(meal_log_service)

    assert app.page is Page.LANDING
    assert meal_log_service.storage.get_item("userMagicKey")


def test_navigation_transitions(meal_log_service: MealLogService) -> None:
    app = NutriSnapApp(meal_log_service)

    app.start_app()
    assert app.page is Page.UPLOAD
    app.go_to_log()
    assert app.page is Page.DASHBOARD
    app.go_to_landing()
    assert app.page is Page.LANDING
    app.go_to_upload()
    assert app.page is Page.UPLOAD


def test_analyzed_meal_shows_results_then_saves(
    meal_log_service: MealLogService,
) -> None:
    app = NutriSnapApp(meal_log_service)
    app.start_app()

    app.meal_analyzed(_analysis(), "/photos/lunch.jpg")
    assert app.page is Page.RESULTS
    assert "Health score: 6 / 10" in app.render()

    record = app.save_to_log()

    assert app.page is Page.DASHBOARD
    assert [meal.id for meal in app.meal_log] == [record.id]
    assert record.image_url == "/photos/lunch.jpg"


def test_save_without_analysis_raises(meal_log_service: MealLogService) -> None:
    app = NutriSnapApp(meal_log_service)

    with pytest.raises(RuntimeError):
        app.save_to_log()


def test_delete_meal_keeps_page(meal_log_service: MealLogService) -> None:
    app = NutriSnapApp(meal_log_service)
    app.meal_analyzed(_analysis(), None)
    record = app.save_to_log()

    app.delete_meal(record.id)

    assert app.page is Page.DASHBOARD
    assert app.meal_log == []


def test_render_landing_depends_on_saved_meals() -> None:
    assert "[Analyze Your First Meal]" in render_landing(has_saved_meals=False)
    assert "[My Log]" in render_landing(has_saved_meals=True)


def test_render_results_lists_items_and_alternatives() -> None:
    text = render_results(_analysis())

    assert "Total calories: 562 kcal" in text
    assert "- grilled chicken: 250 kcal (150g)" in text
    assert 'Replace "french fries" with: roasted sweet potato' in text
    assert "Lean protein paired with a fried side." in text


def test_render_dashboard_empty() -> None:
    text = render_dashboard([])

    assert "Your log is empty" in text


def test_render_dashboard_with_meals() -> None:
    meal = MealRecord(
        id="meal-1",
        date=datetime(2025, 1, 12, 12, tzinfo=UTC),
        **sample_analysis_payload(),
    )

    text = render_dashboard([meal], today=date(2025, 1, 12))

    assert "Sun | ###### 6.0" in text
    assert "Sat | -" in text
    assert "Sunday, Jan 12: grilled chicken, french fries" in text
    assert "6/10 Score" in text
    assert "id meal-1" in text
