"""Models for meal analysis results."""

from pydantic import BaseModel, Field, NonNegativeFloat, NonNegativeInt

NonNegativeNumber = NonNegativeInt | NonNegativeFloat


class FoodItem(BaseModel):
    """Single food item identified in the meal photo."""

    item_name: str
    estimated_grams: NonNegativeNumber
    estimated_calories: NonNegativeNumber


class HealthyAlternative(BaseModel):
    """Suggested swap for a less healthy item."""

    original_item: str
    suggestion: str


class MealAnalysis(BaseModel):
    """Structured output of the analysis provider."""

    food_items: list[FoodItem]
    total_calories: NonNegativeNumber
    health_analysis: str
    health_score: int = Field(ge=1, le=10)
    healthy_alternatives: list[HealthyAlternative]
