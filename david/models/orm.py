# david/models/orm.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship, Mapped, mapped_column

from david.core.db import Base

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

DEFAULT_TITLE = "New Chat"


# ---------- Chat sessions (one per "new chat") ----------
class ChatSession(Base):
    __tablename__ = "chat_sessions"

    # opaque id handed to the client
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # derived from the first user message
    title: Mapped[str] = mapped_column(String(64), default=DEFAULT_TITLE)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    # bumped on every exchange; drives the sidebar order
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    messages: Mapped[list[Message]] = relationship(
        "Message",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="Message.id",
    )


# ---------- Messages (the transcript) ----------
class Message(Base):
    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        ForeignKey("chat_sessions.id", ondelete="CASCADE"), index=True
    )
    role: Mapped[str] = mapped_column(String(16))  # "user" | "assistant"
    content: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    session: Mapped[ChatSession] = relationship("ChatSession", back_populates="messages")

    __table_args__ = (
        CheckConstraint("role in ('user','assistant')", name="chk_chat_messages_role"),
        Index("ix_chat_messages_session_id_id", "session_id", "id"),
    )
