"""Tests for the OpenAI wrapper and the coach prompts, using a stubbed SDK client."""
import json
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from conftest import make_plan
from core.exceptions import AIServiceError, ConfigurationError
from schemas.intake_schema import IntakeFormRequest
from schemas.plan_schema import FitnessPlan
from services.llm_client import LLMClient
from services.nutrition_calculator import nutrition_calculator
from services import prompts


class StubCompletions:
    def __init__(self, content=None, finish_reason="stop", error=None):
        self.content = content
        self.finish_reason = finish_reason
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason=self.finish_reason)])


def _client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def test_generate_object_validates_reply():
    completions = StubCompletions(content=make_plan().model_dump_json())
    llm = LLMClient(client=_client(completions), model="gpt-4o-mini")

    plan = llm.generate_object(system="sys", prompt="Make a plan", schema=FitnessPlan)
    assert len(plan.weekly_workouts) == 7

    call = completions.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    assert call["messages"][0] == {"role": "system", "content": "sys"}
    assert "JSON Schema" in call["messages"][1]["content"]


def test_generate_object_rejects_wrong_shape():
    data = make_plan().model_dump()
    data["weekly_workouts"] = data["weekly_workouts"][:6]
    llm = LLMClient(client=_client(StubCompletions(content=json.dumps(data))))
    with pytest.raises(AIServiceError) as exc_info:
        llm.generate_object(system="sys", prompt="p", schema=FitnessPlan)
    assert "FitnessPlan" in exc_info.value.message


def test_truncated_json_is_an_error():
    llm = LLMClient(client=_client(StubCompletions(content='{"user_summary": "', finish_reason="length")))
    with pytest.raises(AIServiceError):
        llm.generate_object(system="sys", prompt="p", schema=FitnessPlan)


def test_provider_errors_become_ai_service_errors():
    llm = LLMClient(client=_client(StubCompletions(error=OpenAIError("quota exceeded"))))
    with pytest.raises(AIServiceError) as exc_info:
        llm.generate_text(system="sys", prompt="hi", temperature=0.8, max_tokens=300)
    assert "quota exceeded" in exc_info.value.message
    assert exc_info.value.status_code == 502


def test_empty_reply_is_an_error():
    llm = LLMClient(client=_client(StubCompletions(content="")))
    with pytest.raises(AIServiceError):
        llm.generate_text(system="sys", prompt="hi", temperature=0.8, max_tokens=300)


def test_generate_text_strips_whitespace():
    llm = LLMClient(client=_client(StubCompletions(content="  Drink water.  \n")))
    assert llm.generate_text(system="sys", prompt="hi", temperature=0.8, max_tokens=300) == "Drink water."


def test_missing_api_key_is_a_configuration_error():
    llm = LLMClient(api_key="")
    assert llm.configured is False
    with pytest.raises(ConfigurationError):
        llm.generate_text(system="sys", prompt="hi", temperature=0.8, max_tokens=300)


def test_plan_prompt_carries_profile_and_targets(intake_payload):
    intake = IntakeFormRequest(**intake_payload)
    prompt = prompts.build_plan_prompt(intake, nutrition_calculator.calculate_targets(intake))
    assert "30" in prompt
    assert "LOSE_WEIGHT" in prompt
    assert "STRENGTH, HIIT" in prompt
    assert "2459" in prompt
    assert "Mediterranean" in prompt
