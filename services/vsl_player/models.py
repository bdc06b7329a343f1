"""
VSL Player Types

Pydantic models for player configuration and saved projects.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from config import settings


class AspectRatio(str, Enum):
    HORIZONTAL = "16:9"
    VERTICAL = "9:16"

    @property
    def css_ratio(self) -> str:
        """Value for the CSS aspect-ratio property, e.g. 16/9."""
        return self.value.replace(":", "/")

    @property
    def is_vertical(self) -> bool:
        return self is AspectRatio.VERTICAL


class PlayerConfig(BaseModel):
    """Everything the embed generator needs to render one player."""
    display_name: str = Field(default="Nova VSL Sem Título", alias="name")
    video_source: str = Field(default=settings.DEFAULT_VIDEO_URL, alias="videoUrl", min_length=1)
    aspect_ratio: AspectRatio = Field(default=AspectRatio.HORIZONTAL, alias="ratio")
    accent_color: str = Field(default=settings.DEFAULT_ACCENT_COLOR, alias="primaryColor")
    retention_curve_exponent: float = Field(
        default=0.5,
        alias="retentionSpeed",
        ge=settings.MIN_RETENTION_EXPONENT,
        le=settings.MAX_RETENTION_EXPONENT,
        description="Exponent applied to elapsed fraction; 1.0 is linear",
    )
    content_delay_enabled: bool = Field(default=False, alias="hasDelay")
    content_delay_seconds: int = Field(default=60, alias="delaySeconds", ge=0)

    class Config:
        populate_by_name = True

    @field_validator("video_source")
    @classmethod
    def _strip_video_source(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("video source must not be blank")
        return value

    def to_api(self) -> dict:
        """Serialize with the camelCase names the editor uses."""
        return self.model_dump(by_alias=True, mode="json")


class Project(BaseModel):
    """A persisted PlayerConfig plus ownership and bookkeeping fields."""
    id: str
    owner: str
    config: PlayerConfig
    views: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    last_edited: Optional[datetime] = Field(default=None, alias="lastEdited")

    class Config:
        populate_by_name = True

    def to_api(self) -> dict:
        """Flatten config fields next to the project fields, as the dashboard expects."""
        data = self.config.to_api()
        data.update({
            "id": self.id,
            "owner": self.owner,
            "views": self.views,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "lastEdited": self.last_edited.isoformat() if self.last_edited else None,
        })
        return data
