"""
ORM models for persisted VSL projects.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class VSLProject(Base):
    """One saved player configuration, owned by a single user."""
    __tablename__ = "vsl_projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner: Mapped[str] = mapped_column(String(320), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    video_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    ratio: Mapped[str] = mapped_column(String(8), nullable=False, default="16:9")
    primary_color: Mapped[str] = mapped_column(String(32), nullable=False)
    retention_speed: Mapped[float] = mapped_column(Float, nullable=False, default=0.5)
    has_delay: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    delay_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    last_edited: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<VSLProject {self.id} owner={self.owner!r} name={self.name!r}>"
