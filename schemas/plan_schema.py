"""Schemas for the structured weekly plan returned by the language model.

`FitnessPlan` is the exact shape the model must produce; a reply that does
not validate is treated as a failed generation. Response models for plan,
workout and meal rows live at the bottom of the module.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class CalorieCalculation(BaseModel):
    bmr: float = Field(..., description="Basal Metabolic Rate in calories")
    tdee: float = Field(..., description="Total Daily Energy Expenditure")
    daily_target: float = Field(..., description="Daily calorie target for user goal")
    deficit_or_surplus: Optional[float] = Field(None, description="Calorie deficit (-) or surplus (+)")


class Exercise(BaseModel):
    name: str = Field(..., description="Exercise name")
    sets: Optional[int] = Field(None, description="Number of sets")
    reps: Optional[str] = Field(None, description='Reps or duration (e.g. "8-10" or "30 seconds")')
    rest_seconds: Optional[int] = Field(None, description="Rest time between sets")
    instructions: str = Field(..., description="How to perform the exercise correctly")
    modifications: Optional[str] = Field(None, description="Easier/harder variations")
    target_muscles: List[str] = Field(..., description="Primary muscles worked")


class WorkoutDay(BaseModel):
    day: str = Field(..., description="Day of the week")
    title: str = Field(..., description="Workout title")
    duration_min: int = Field(..., description="Total workout duration")
    difficulty: Literal["BEGINNER", "INTERMEDIATE", "ADVANCED"]
    warmup: List[Exercise] = Field(..., description="Warm-up exercises")
    exercises: List[Exercise] = Field(..., description="Main workout exercises")
    cooldown: List[Exercise] = Field(..., description="Cool-down exercises")
    estimated_calories: float = Field(..., description="Estimated calories burned")


class PlannedMeal(BaseModel):
    type: Literal["breakfast", "lunch", "dinner", "snack"]
    name: str = Field(..., description="Meal name")
    calories: float = Field(..., description="Total calories")
    protein: float = Field(..., description="Protein in grams")
    carbs: float = Field(..., description="Carbohydrates in grams")
    fat: float = Field(..., description="Fat in grams")
    prep_time_min: int = Field(..., description="Preparation time in minutes")
    ingredients: List[str] = Field(..., description="List of ingredients")
    instructions: str = Field(..., description="Cooking/preparation instructions")


class DailyMacros(BaseModel):
    protein: float
    carbs: float
    fat: float


class DailyMealPlan(BaseModel):
    day: str = Field(..., description="Day of the week")
    meals: List[PlannedMeal] = Field(..., description="All meals for the day")
    daily_calories: float = Field(..., description="Total calories for the day")
    daily_macros: DailyMacros


class GroceryList(BaseModel):
    produce: List[str] = Field(..., description="Fruits and vegetables")
    proteins: List[str] = Field(..., description="Meat, fish, dairy, plant proteins")
    grains: List[str] = Field(..., description="Rice, pasta, bread, cereals")
    pantry: List[str] = Field(..., description="Oils, spices, condiments")
    dairy: List[str] = Field(..., description="Milk, cheese, yogurt")
    other: List[str] = Field(..., description="Other items")


class FitnessPlan(BaseModel):
    """Complete 7-day plan as produced by the coach model."""

    user_summary: str = Field(..., description="Brief summary of user profile and goals")
    calorie_calculation: CalorieCalculation
    weekly_workouts: List[WorkoutDay] = Field(..., min_length=7, max_length=7, description="7-day workout plan")
    meal_plan: List[DailyMealPlan] = Field(..., min_length=7, max_length=7, description="7-day meal plan")
    grocery_list: GroceryList
    weekly_tips: List[str] = Field(..., description="3-5 motivational tips for the week")
    check_in_questions: List[str] = Field(..., description="3 questions to ask user next week")
    important_notes: str = Field(..., description="Important safety notes and reminders")


class WorkoutOut(BaseModel):
    id: int
    plan_id: int
    workout_date: str
    title: str
    duration_min: int
    difficulty_level: str
    status: str
    estimated_calories_burned: Optional[float] = None
    actual_duration_min: Optional[int] = None
    calories_burned: Optional[float] = None
    user_rating: Optional[int] = None
    user_notes: Optional[str] = None
    completed_at: Optional[str] = None
    workout_data: Dict[str, Any]


class MealOut(BaseModel):
    id: int
    plan_id: int
    meal_date: str
    meal_type: str
    name: str
    calories: float
    macros: Dict[str, float]
    ingredients: List[str]
    prep_time_min: Optional[int] = None
    recipe_instructions: Optional[str] = None
    status: str
    user_rating: Optional[int] = None
    user_notes: Optional[str] = None
    consumed_at: Optional[str] = None


class PlanOut(BaseModel):
    id: int
    intake_form_id: int
    plan_type: str
    status: str
    start_date: str
    end_date: str
    daily_calorie_target: float
    calorie_calculation: Dict[str, Any]
    target_macros: Dict[str, int]
    llm_response_cached: bool
    plan_data: Dict[str, Any]
    workouts: List[WorkoutOut]
    meals: List[MealOut]
    created_at: str


class CurrentPlanResponse(BaseModel):
    success: bool = True
    plan: Optional[PlanOut] = None


class TodaysWorkoutResponse(BaseModel):
    success: bool = True
    workout: Optional[WorkoutOut] = None


class WorkoutCompletionRequest(BaseModel):
    actual_duration_min: int = Field(..., ge=1, le=300, examples=[45])
    calories_burned: Optional[float] = Field(None, ge=0, le=2000, examples=[350])
    user_rating: int = Field(..., ge=1, le=5, examples=[4])
    user_notes: Optional[str] = Field(None, max_length=500)


class WorkoutModifyRequest(BaseModel):
    feedback: str = Field(..., min_length=1, max_length=1000, examples=["My knee hurts on lunges"])
    available_equipment: Optional[List[str]] = None


class WorkoutModifyResponse(BaseModel):
    success: bool = True
    workout_id: int
    suggestions: str
    user_notes: str


class MealLogRequest(BaseModel):
    user_rating: Optional[int] = Field(None, ge=1, le=5)
    user_notes: Optional[str] = Field(None, max_length=300)
    actual_portions: float = Field(1.0, ge=0.1, le=3)


class ActionResponse(BaseModel):
    """Generic `{success, message}` acknowledgement."""

    success: bool = True
    message: str
