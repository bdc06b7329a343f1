"""
Project Store
Persists player configurations keyed by owner and backs the dashboard
(create, update, delete, list with name search).
"""
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from database.connection import SessionLocal
from database.models import VSLProject

from .errors import PersistenceError, ProjectNotFoundError
from .models import PlayerConfig, Project


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands timestamps back without an offset; they were stored as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_project(row: VSLProject) -> Project:
    config = PlayerConfig(
        name=row.name,
        videoUrl=row.video_url,
        ratio=row.ratio,
        primaryColor=row.primary_color,
        retentionSpeed=row.retention_speed,
        hasDelay=row.has_delay,
        delaySeconds=row.delay_seconds,
    )
    return Project(
        id=row.id,
        owner=row.owner,
        config=config,
        views=row.views,
        created_at=_as_utc(row.created_at),
        last_edited=_as_utc(row.last_edited),
    )


def _apply_config(row: VSLProject, config: PlayerConfig) -> None:
    row.name = config.display_name
    row.video_url = config.video_source
    row.ratio = config.aspect_ratio.value
    row.primary_color = config.accent_color
    row.retention_speed = config.retention_curve_exponent
    row.has_delay = config.content_delay_enabled
    row.delay_seconds = config.content_delay_seconds


class ProjectStore:
    """
    CRUD over VSL projects.

    Every operation runs in its own session and either commits fully or
    rolls back, so a failed save never leaves a half-written record.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Project store unavailable during {action}: {e}")
            raise PersistenceError(f"Project store unavailable, could not {action}", transient=True) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Project store error during {action}: {e}")
            raise PersistenceError(f"Could not {action}") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @staticmethod
    def _owned(db: Session, owner: str, project_id: str) -> VSLProject:
        row = db.get(VSLProject, project_id)
        # Other owners' projects are reported as missing
        if row is None or row.owner != owner:
            raise ProjectNotFoundError(f"Project {project_id} not found")
        return row

    def create(self, owner: str, config: PlayerConfig) -> Project:
        with self._session("create project") as db:
            now = datetime.now(timezone.utc)
            row = VSLProject(id=str(uuid.uuid4()), owner=owner, views=0, created_at=now, last_edited=now)
            _apply_config(row, config)
            db.add(row)
            db.flush()
            project = _to_project(row)

        logger.info(f"Created project {project.id} for {owner}")
        return project

    def get(self, owner: str, project_id: str) -> Project:
        with self._session("load project") as db:
            return _to_project(self._owned(db, owner, project_id))

    def update(self, owner: str, project_id: str, config: PlayerConfig) -> Project:
        with self._session("update project") as db:
            row = self._owned(db, owner, project_id)
            _apply_config(row, config)
            row.last_edited = datetime.now(timezone.utc)
            db.flush()
            project = _to_project(row)

        logger.info(f"Updated project {project_id}")
        return project

    def delete(self, owner: str, project_id: str) -> None:
        with self._session("delete project") as db:
            db.delete(self._owned(db, owner, project_id))

        logger.info(f"Deleted project {project_id}")

    def list_by_owner(self, owner: str, search: Optional[str] = None) -> List[Project]:
        """Owner's projects, most recently edited first, optionally filtered by name."""
        with self._session("list projects") as db:
            query = (
                select(VSLProject)
                .where(VSLProject.owner == owner)
                .order_by(VSLProject.last_edited.desc())
            )
            rows = list(db.scalars(query))

        # Matched in Python: SQLite only folds ASCII case, and names are often accented
        needle = (search or "").strip().casefold()
        if needle:
            rows = [row for row in rows if needle in row.name.casefold()]
        return [_to_project(row) for row in rows]
