"""Schemas for coach chat, message feedback and motivation."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ChatWorkoutContext(BaseModel):
    title: str
    duration_min: Optional[int] = None


class ChatProgressContext(BaseModel):
    entry_date: str
    weight_kg: Optional[float] = None
    body_fat_percentage: Optional[float] = None
    energy_level: Optional[int] = None


class ChatContext(BaseModel):
    """Ad hoc state the client sends along with a question."""

    current_workout: Optional[ChatWorkoutContext] = None
    recent_progress: Optional[List[ChatProgressContext]] = None
    available_equipment: Optional[List[str]] = None
    user_preferences: Optional[Dict[str, Any]] = None


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=1000, examples=["Can I swap squats for lunges?"])
    context: ChatContext = Field(default_factory=ChatContext)


class ChatResponse(BaseModel):
    success: bool = True
    response: str
    message_id: int


class ChatMessageOut(BaseModel):
    id: int
    message_type: str
    content: str
    context_data: Optional[Dict[str, Any]] = None
    created_at: str


class ChatHistoryResponse(BaseModel):
    success: bool = True
    messages: List[ChatMessageOut]


class MessageFeedbackRequest(BaseModel):
    feedback_type: Literal["positive", "negative"]
    feedback_text: Optional[str] = Field(None, max_length=500)


class FeedbackStats(BaseModel):
    total_feedback: int
    positive_count: int
    negative_count: int
    satisfaction_rate: float


class FeedbackStatsResponse(BaseModel):
    success: bool = True
    stats: FeedbackStats


class MotivationResponse(BaseModel):
    success: bool = True
    message: str
    completed_workouts: int
    streak_days: int
