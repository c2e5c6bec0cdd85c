"""Coach service: plan generation and chat on top of the LLM client.

`FitnessCoachAI` computes calorie targets, builds prompts, consults the plan
cache and delegates to `LLMClient`. Plan generation failures propagate to the
caller; chat and motivation fall back to fixed text so the conversation never
breaks on a provider outage.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from core import config
from core.exceptions import AIServiceError, ConfigurationError
from core.logger import get_logger
from schemas.plan_schema import FitnessPlan
from services.llm_client import LLMClient
from services.nutrition_calculator import CalorieTargets, NutritionCalculator, nutrition_calculator
from services.plan_cache import PlanCache, make_cache_key
from services import prompts

logger = get_logger("services.fitness_coach")

CHAT_FALLBACK = (
    "I'm having trouble processing your question right now. "
    "Please try again, or contact support if the issue persists."
)
MOTIVATION_FALLBACK = "Keep up the great work! Every workout brings you closer to your goals."


@dataclass
class PlanResult:
    plan: FitnessPlan
    targets: CalorieTargets
    cache_key: str
    cached: bool


class FitnessCoachAI:
    """Prompt construction and LLM orchestration for the coach."""

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        cache: Optional[PlanCache] = None,
        calculator: NutritionCalculator = nutrition_calculator,
    ):
        self.llm = llm or LLMClient()
        self.cache = cache if cache is not None else PlanCache()
        self.calculator = calculator

    def generate_weekly_plan(self, intake, use_cache: bool = True) -> PlanResult:
        """Return a 7-day plan for `intake`, from cache when an identical profile was seen.

        Raises:
            AIServiceError: If the provider fails or the reply does not match `FitnessPlan`.
            ConfigurationError: If no API key is configured.
        """
        cache_key = make_cache_key(intake)
        targets = self.calculator.calculate_targets(intake)

        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.info("Returning cached plan")
                return PlanResult(plan=cached, targets=targets, cache_key=cache_key, cached=True)

        prompt = prompts.build_plan_prompt(intake, targets)
        logger.info("Generating plan with AI (target %s kcal)", round(targets.daily_target))
        plan = self.llm.generate_object(
            system=prompts.SYSTEM_PROMPT,
            prompt=prompt,
            schema=FitnessPlan,
            temperature=config.AI_TEMPERATURE,
            max_tokens=config.AI_MAX_TOKENS,
        )

        if use_cache:
            self.cache.set(cache_key, plan)
        return PlanResult(plan=plan, targets=targets, cache_key=cache_key, cached=False)

    def generate_chat_response(self, message: str, context) -> str:
        """Answer one user question with the supplied context only."""
        prompt = prompts.build_chat_prompt(message, context)
        try:
            return self.llm.generate_text(
                system=prompts.SYSTEM_PROMPT,
                prompt=prompt,
                temperature=config.CHAT_TEMPERATURE,
                max_tokens=config.CHAT_MAX_TOKENS,
            )
        except (AIServiceError, ConfigurationError) as exc:
            logger.error("Error generating chat response: %s", exc.message)
            return CHAT_FALLBACK

    def modify_workout(self, workout_data: dict, feedback: str, equipment: Iterable[str]) -> str:
        """Suggest modifications to a workout. Provider errors propagate."""
        prompt = prompts.build_modify_workout_prompt(workout_data, feedback, equipment)
        return self.llm.generate_text(
            system=prompts.SYSTEM_PROMPT,
            prompt=prompt,
            temperature=0.6,
            max_tokens=1000,
        )

    def generate_motivational_message(self, completed_workouts: int, streak: int, goal: str) -> str:
        prompt = prompts.build_motivation_prompt(completed_workouts, streak, goal)
        try:
            return self.llm.generate_text(
                system=prompts.SYSTEM_PROMPT,
                prompt=prompt,
                temperature=0.9,
                max_tokens=150,
            )
        except (AIServiceError, ConfigurationError) as exc:
            logger.error("Error generating motivational message: %s", exc.message)
            return MOTIVATION_FALLBACK


# export singleton
fitness_coach = FitnessCoachAI()


def get_fitness_coach() -> FitnessCoachAI:
    """FastAPI dependency returning the process-wide coach."""
    return fitness_coach
