"""Nutrition calculation helpers.

Provides BMR/TDEE, the goal-based calorie adjustment and macro allocation
used to give the plan model concrete calorie targets.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional
from core.logger import get_logger

logger = get_logger("services.nutrition_calculator")

ACTIVITY_MULTIPLIERS = {
    "SEDENTARY": 1.2,
    "LIGHT": 1.375,
    "MODERATE": 1.55,
    "ACTIVE": 1.725,
    "VERY_ACTIVE": 1.9,
}


def _value(field) -> str:
    """Accept either an enum member or its raw string value."""
    return getattr(field, "value", field)


@dataclass(frozen=True)
class CalorieTargets:
    bmr: float
    tdee: float
    adjustment: float
    daily_target: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


class NutritionCalculator:
    """Class-based nutrition calculator used across the app."""

    def calculate_bmi(self, height_cm: float, weight_kg: float) -> float:
        """Calculate BMI from height in cm and weight in kg."""
        h_m = height_cm / 100.0
        if h_m <= 0:
            return 0.0
        return weight_kg / (h_m * h_m)

    def calculate_bmr(self, age: int, sex: str, weight_kg: float, height_cm: float) -> float:
        """Calculate BMR using the Mifflin-St Jeor equation.

        Inputs are not range checked; the intake schema bounds them upstream.
        """
        base = 10 * weight_kg + 6.25 * height_cm - 5 * age
        if str(_value(sex)).upper() == "MALE":
            return base + 5
        return base - 161

    def calculate_tdee(self, bmr: float, activity_level: str) -> float:
        """Scale BMR by the activity multiplier; unknown levels count as sedentary."""
        val = bmr * ACTIVITY_MULTIPLIERS.get(_value(activity_level), 1.2)
        logger.debug("TDEE calculated: %s", val)
        return val

    def calculate_calorie_adjustment(
        self, goal: str, current_weight: float, goal_weight: Optional[float]
    ) -> float:
        """Signed daily calorie offset derived from the goal and the weight gap.

        Weight loss always gets at least a 300 kcal deficit (50 kcal per kg of
        gap beyond that); muscle gain at least a 200 kcal surplus (25 kcal per kg).
        """
        if not goal_weight:
            return 0
        weight_diff = current_weight - goal_weight
        goal = _value(goal)
        if goal == "LOSE_WEIGHT":
            val = min(-300, -weight_diff * 50)
        elif goal == "BUILD_MUSCLE":
            val = max(200, abs(weight_diff) * 25)
        elif goal == "MAINTAIN":
            val = 0
        else:
            val = -200 if weight_diff > 0 else 100
        logger.debug("Calorie adjustment for goal %s: %s", goal, val)
        return val

    def calculate_targets(self, intake) -> CalorieTargets:
        """Compute BMR, TDEE, adjustment and daily target for an intake form.

        `intake` may be the request schema or the stored ORM row; only
        attribute access is used.
        """
        bmr = self.calculate_bmr(intake.age, intake.sex, intake.weight_kg, intake.height_cm)
        tdee = self.calculate_tdee(bmr, intake.activity_level)
        adjustment = self.calculate_calorie_adjustment(
            intake.primary_goal, intake.weight_kg, intake.goal_weight_kg
        )
        return CalorieTargets(bmr=bmr, tdee=tdee, adjustment=adjustment, daily_target=tdee + adjustment)

    def calculate_macros(self, target_calories: float, diet_preferences: Iterable[str]) -> Dict[str, int]:
        """Allocate macronutrient targets (grams) from a calorie target."""
        prefs = {_value(p) for p in diet_preferences or []}
        if "KETO" in prefs:
            ratios = {"protein": 0.3, "carbs": 0.1, "fat": 0.6}
        elif prefs & {"VEGAN", "VEGETARIAN"}:
            ratios = {"protein": 0.25, "carbs": 0.5, "fat": 0.25}
        else:
            ratios = {"protein": 0.3, "carbs": 0.4, "fat": 0.3}
        return {
            "protein": round(target_calories * ratios["protein"] / 4),
            "carbs": round(target_calories * ratios["carbs"] / 4),
            "fat": round(target_calories * ratios["fat"] / 9),
        }


# export singleton
nutrition_calculator = NutritionCalculator()
__all__ = ["CalorieTargets", "NutritionCalculator", "nutrition_calculator", "ACTIVITY_MULTIPLIERS"]
