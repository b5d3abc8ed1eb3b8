import logging

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session, select

from hermetrix.api.deps import get_session_id
from hermetrix.core.config import settings
from hermetrix.core.database import get_db
from hermetrix.core.rate_limit import RATE_LIMIT_STR, limiter
from hermetrix.models import ChatMessage
from hermetrix.schemas import ChatMessageRead, ChatReply, ChatSend
from hermetrix.services import ai_client

log = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/messages", response_model=list[ChatMessageRead])
def list_messages(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(ChatMessage)
        .where(ChatMessage.session_id == session_id)
        .order_by(ChatMessage.created_at, ChatMessage.id)
    )
    return list(db.exec(stmt).all())


@router.post("/send", response_model=ChatReply)
@limiter.limit(RATE_LIMIT_STR)
def send_message(
    request: Request,
    body: ChatSend,
    session_id: str = Depends(get_session_id),
    db: Session = Depends(get_db),
):
    """Always answers: model failures (or a missing key) degrade to a canned topic response."""
    recent = db.exec(
        select(ChatMessage)
        .where(ChatMessage.session_id == session_id)
        .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
        .limit(settings.chat_history_limit)
    ).all()
    history = [{"role": m.role, "content": m.content} for m in reversed(recent)]

    db.add(ChatMessage(session_id=session_id, role="user", content=body.content))
    db.commit()

    reply = ai_client.chat_reply(body.content, history)

    db.add(ChatMessage(session_id=session_id, role="assistant", content=reply))
    db.commit()
    return ChatReply(success=True, response=reply)
