"""Coach chat API router.

Every exchange is persisted as a USER row followed by an ASSISTANT row in
`chat_history`. Users can rate assistant replies, and the coach can send a
short motivational message based on this week's training.
"""

import json

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.exceptions import ValidationError
from core.logger import get_logger
from core.repository import get_owned_or_404, save
from database import models
from database.deps import get_current_user, get_db_read, get_db_write
from schemas.chat_schema import (
    ChatHistoryResponse,
    ChatMessageOut,
    ChatRequest,
    ChatResponse,
    FeedbackStats,
    FeedbackStatsResponse,
    MessageFeedbackRequest,
    MotivationResponse,
)
from schemas.plan_schema import ActionResponse
from services.fitness_coach import FitnessCoachAI, get_fitness_coach
from services.progress_analytics import compute_analytics, completed_this_week

logger = get_logger("api.chat")
router = APIRouter(prefix="/api", tags=["chat"])


def message_to_out(message: models.ChatMessage) -> ChatMessageOut:
    return ChatMessageOut(
        id=message.id,
        message_type=message.message_type,
        content=message.message_content,
        context_data=json.loads(message.context_data) if message.context_data else None,
        created_at=message.created_at.isoformat(),
    )


@router.post("/chat", response_model=ChatResponse)
def send_chat_message(
    payload: ChatRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
    coach: FitnessCoachAI = Depends(get_fitness_coach),
):
    """Answer one question and record both sides of the exchange."""
    context = payload.context.model_dump(exclude_none=True)
    user_message = save(db, models.ChatMessage(
        user_id=user.id,
        message_type="USER",
        message_content=payload.message,
        context_data=json.dumps(context) if context else None,
    ))

    reply = coach.generate_chat_response(payload.message, payload.context)

    assistant_message = save(db, models.ChatMessage(
        user_id=user.id,
        message_type="ASSISTANT",
        message_content=reply,
        context_data=json.dumps({"in_reply_to": user_message.id}),
    ))
    logger.info("Chat reply %s stored for user %s", assistant_message.id, user.id)
    return ChatResponse(response=reply, message_id=assistant_message.id)


@router.get("/chat/history", response_model=ChatHistoryResponse)
def get_chat_history(
    limit: int = Query(50, ge=1, le=500),
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
):
    """Return the latest `limit` messages, oldest first."""
    latest = db.query(models.ChatMessage).filter(
        models.ChatMessage.user_id == user.id
    ).order_by(models.ChatMessage.id.desc()).limit(limit).all()
    return ChatHistoryResponse(messages=[message_to_out(m) for m in reversed(latest)])


@router.post("/chat/messages/{message_id}/feedback", response_model=ActionResponse, status_code=201)
def submit_message_feedback(
    message_id: int,
    payload: MessageFeedbackRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
):
    """Record a thumbs up or down on one of the coach's replies.

    Raises:
        NotFoundError: If the message does not exist or belongs to someone else.
        ValidationError: If the message is not an assistant reply.
    """
    message = get_owned_or_404(db, models.ChatMessage, message_id, user.id, "ChatMessage")
    if message.message_type != "ASSISTANT":
        raise ValidationError("Feedback can only be given on coach replies", field="message_id")

    save(db, models.MessageFeedback(
        message_id=message.id,
        user_id=user.id,
        feedback_type=payload.feedback_type,
        feedback_text=payload.feedback_text,
    ))
    logger.info("Feedback %s recorded on message %s", payload.feedback_type, message.id)
    return ActionResponse(message="Thanks for your feedback!")


@router.get("/chat/feedback/stats", response_model=FeedbackStatsResponse)
def get_feedback_stats(user: models.User = Depends(get_current_user), db: Session = Depends(get_db_read)):
    types = [row.feedback_type for row in db.query(models.MessageFeedback.feedback_type).filter(
        models.MessageFeedback.user_id == user.id
    )]
    total = len(types)
    positive = types.count("positive")
    rate = round(positive / total * 100, 2) if total else 0.0
    return FeedbackStatsResponse(stats=FeedbackStats(
        total_feedback=total,
        positive_count=positive,
        negative_count=types.count("negative"),
        satisfaction_rate=rate,
    ))


@router.get("/coach/motivation", response_model=MotivationResponse)
def get_motivation(
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
    coach: FitnessCoachAI = Depends(get_fitness_coach),
):
    completed = completed_this_week(db, user.id)
    streak = compute_analytics(db, user.id).streak_days

    intake = db.query(models.IntakeForm).filter(
        models.IntakeForm.user_id == user.id
    ).order_by(models.IntakeForm.id.desc()).first()
    goal = intake.primary_goal if intake else "GENERAL_HEALTH"

    message = coach.generate_motivational_message(completed, streak, goal)
    return MotivationResponse(message=message, completed_workouts=completed, streak_days=streak)
