"""
Prompt templates for the coach model.

`SYSTEM_PROMPT` is shared by every call. The builders interpolate intake
fields, calorie targets and chat context into plain-text user prompts.
"""

import json

SYSTEM_PROMPT = """You are FitForge AI, an expert fitness coach and nutritionist with years of experience creating personalized workout and meal plans.

CORE PRINCIPLES:
- Provide evidence-based, safe recommendations only
- Prioritize user safety - never recommend potentially harmful exercises
- Respect user limitations, equipment constraints, and dietary restrictions
- Provide clear, actionable guidance with proper form instructions
- NEVER give medical advice - always refer users to healthcare professionals
- Focus on sustainable, realistic lifestyle changes

SAFETY RULES:
- Always include proper warm-up and cool-down exercises
- Provide exercise modifications for different fitness levels
- Include rest days in weekly plans to prevent overtraining
- Respect reported injuries and physical limitations
- Ensure nutritional plans meet basic macro and micronutrient needs

OUTPUT FORMAT:
- Always return valid JSON matching the requested schema
- Include detailed instructions and safety notes
- Provide exercise modifications and progressions
- Make meal plans practical with simple, accessible ingredients"""

PLAN_PROMPT = """
Generate a personalized 7-day fitness and nutrition plan for this user:

USER PROFILE:
- Age: {age}, Sex: {sex}
- Height: {height_cm}cm, Weight: {weight_kg}kg
- Goal Weight: {goal_weight}
- Target Date: {target_date}
- Activity Level: {activity_level}
- Fitness Level: {fitness_level}
- Primary Goal: {primary_goal}
- Motivation Style: {motivation_style}

TRAINING PREFERENCES:
- Training Styles: {training_styles}
- Days per week: {days_per_week}
- Session duration: {session_minutes} minutes
- Available equipment: {equipment}
- Injuries/limitations: {injuries}

NUTRITION PREFERENCES:
- Diet preferences: {diet_preferences}
- Cuisine preferences: {cuisines}
- Food allergies: {allergies}
- Foods to avoid: {foods_to_avoid}

CALCULATED NUTRITION TARGETS:
- BMR: {bmr} calories
- TDEE: {tdee} calories
- Daily target: {daily_target} calories

REQUIREMENTS:
1. Create exactly 7 workouts (one for each day, including rest/active recovery days)
2. Each workout must respect the user's equipment limitations
3. Progress difficulty appropriately throughout the week
4. Include modifications for the user's fitness level
5. Plan 7 days of meals hitting the daily calorie target (+/-100 calories)
6. Each meal should be realistic with at most 6 ingredients and at most 30 min prep time
7. Respect all dietary restrictions and preferences
8. Include a grocery list organized by category
9. Add motivational tips and check-in questions
10. Include important safety notes

Generate a comprehensive plan that this user can immediately start following."""

CHAT_PROMPT = """
{context}

User Question: "{message}"

Provide a helpful, encouraging response that:
1. Directly addresses their question
2. Offers practical advice or modifications
3. Stays within your role as a fitness coach (no medical advice)
4. Maintains a motivational, supportive tone
5. Suggests specific actions if appropriate

Keep your response under 200 words and actionable."""

MODIFY_WORKOUT_PROMPT = """
Current Workout: {workout}

User Feedback: "{feedback}"
Available Equipment: {equipment}

Modify this workout based on the user's feedback. Return only the parts that need to change:
- If they need easier exercises, provide modifications
- If they want more challenge, increase intensity appropriately
- If equipment is missing, suggest alternatives
- Maintain the same overall structure and target muscles

Respond with specific exercise modifications, not a complete new workout."""

MOTIVATION_PROMPT = """
User Progress:
- Completed workouts this week: {completed_workouts}
- Current streak: {streak} days
- Primary goal: {goal}

Generate a motivational message (2-3 sentences) that:
1. Acknowledges their progress
2. Encourages consistency
3. Relates to their specific goal
4. Maintains an upbeat, supportive tone"""


def _v(value):
    return getattr(value, "value", value)


def _join(items, empty: str = "None") -> str:
    items = [str(_v(i)) for i in (items or [])]
    return ", ".join(items) if items else empty


def build_plan_prompt(intake, targets) -> str:
    """Render the plan request for an intake form and its calorie targets."""
    return PLAN_PROMPT.format(
        age=intake.age,
        sex=_v(intake.sex),
        height_cm=intake.height_cm,
        weight_kg=intake.weight_kg,
        goal_weight=f"{intake.goal_weight_kg}kg" if intake.goal_weight_kg else "Not specified",
        target_date=intake.target_date or "Not specified",
        activity_level=_v(intake.activity_level),
        fitness_level=_v(intake.fitness_level),
        primary_goal=_v(intake.primary_goal),
        motivation_style=_v(intake.motivation_style),
        training_styles=_join(intake.training_styles),
        days_per_week=intake.days_per_week,
        session_minutes=intake.session_minutes,
        equipment=_join(intake.equipment),
        injuries=intake.injuries_limitations or "None reported",
        diet_preferences=_join(intake.diet_preferences, "No restrictions"),
        cuisines=_join(intake.cuisine_preferences, "Any"),
        allergies=intake.food_allergies or "None reported",
        foods_to_avoid=intake.foods_to_avoid or "None specified",
        bmr=round(targets.bmr),
        tdee=round(targets.tdee),
        daily_target=round(targets.daily_target),
    )


def build_chat_context(context) -> str:
    """Render the CURRENT CONTEXT block from a `ChatContext`."""
    lines = ["CURRENT CONTEXT:"]
    if context.current_workout:
        workout = context.current_workout
        duration = f" ({workout.duration_min} min)" if workout.duration_min else ""
        lines.append(f"- Today's workout: {workout.title}{duration}")
    if context.recent_progress:
        lines.append("- Recent progress:")
        for entry in context.recent_progress:
            parts = [entry.entry_date]
            if entry.weight_kg is not None:
                parts.append(f"weight {entry.weight_kg}kg")
            if entry.body_fat_percentage is not None:
                parts.append(f"body fat {entry.body_fat_percentage}%")
            if entry.energy_level is not None:
                parts.append(f"energy {entry.energy_level}/5")
            lines.append("  * " + ", ".join(parts))
    if context.available_equipment:
        lines.append(f"- Available equipment: {_join(context.available_equipment)}")
    if context.user_preferences:
        lines.append(f"- User preferences: {json.dumps(context.user_preferences, sort_keys=True)}")
    return "\n".join(lines)


def build_chat_prompt(message: str, context) -> str:
    return CHAT_PROMPT.format(context=build_chat_context(context), message=message)


def build_modify_workout_prompt(workout_data: dict, feedback: str, equipment) -> str:
    return MODIFY_WORKOUT_PROMPT.format(
        workout=json.dumps(workout_data, indent=2),
        feedback=feedback,
        equipment=_join(equipment, "Not specified"),
    )


def build_motivation_prompt(completed_workouts: int, streak: int, goal: str) -> str:
    return MOTIVATION_PROMPT.format(completed_workouts=completed_workouts, streak=streak, goal=_v(goal))
