"""Repositories for generated content and curricula."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from config.database import build_engine, build_session_factory, init_db, session_scope
from config.settings import settings
from content.errors import ContentNotFoundError
from content.time_format import utcnow
from models.content_models import ContentRecord, CurriculumRecord
from models.db_models import ContentRow

logger = logging.getLogger(__name__)

# Fields a caller may set on create or update
CONTENT_FIELDS = ("title", "contentType", "content", "curriculumId", "createdAt", "updatedAt")


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current UTC time, nudged forward so it is strictly after `previous`."""
    now = utcnow()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class ContentRepository(ABC):
    """Keyed collection of content records."""

    @abstractmethod
    async def create(self, record: Dict[str, Any]) -> int:
        """Store a new record and return its assigned id."""

    @abstractmethod
    async def get(self, content_id: int) -> Optional[ContentRecord]:
        """Fetch a record, or None if the id is unknown."""

    @abstractmethod
    async def list_all(self) -> List[ContentRecord]:
        """All records in id order."""

    @abstractmethod
    async def list_recent(self, limit: int = 5) -> List[ContentRecord]:
        """Records ordered by createdAt descending, ties by insertion order."""

    @abstractmethod
    async def update(self, content_id: int, partial: Dict[str, Any]) -> ContentRecord:
        """
        Shallow-merge `partial` into a record and refresh updatedAt.

        Raises:
            ContentNotFoundError: If the id is unknown
        """


class InMemoryContentRepository(ContentRepository):
    """Process-local store; ids are never reused within the process lifetime."""

    def __init__(self):
        self._contents: Dict[int, ContentRecord] = {}
        self._current_id = 1
        logger.info("InMemoryContentRepository initialized")

    async def create(self, record: Dict[str, Any]) -> int:
        content_id = self._current_id
        self._current_id += 1

        data = {k: v for k, v in record.items() if k in CONTENT_FIELDS}
        data.setdefault("createdAt", utcnow())
        data.setdefault("updatedAt", None)

        self._contents[content_id] = ContentRecord(id=content_id, **data)
        logger.info(f"Stored content {content_id}: {data.get('title')}")
        return content_id

    async def get(self, content_id: int) -> Optional[ContentRecord]:
        return self._contents.get(content_id)

    async def list_all(self) -> List[ContentRecord]:
        return list(self._contents.values())

    async def list_recent(self, limit: int = 5) -> List[ContentRecord]:
        # sorted() is stable and dict order is insertion order
        records = sorted(self._contents.values(), key=lambda r: r.createdAt, reverse=True)
        return records[:limit]

    async def update(self, content_id: int, partial: Dict[str, Any]) -> ContentRecord:
        current = self._contents.get(content_id)
        if current is None:
            raise ContentNotFoundError("Content", content_id)

        changes = {k: v for k, v in partial.items() if k in CONTENT_FIELDS and k != "updatedAt"}
        changes["updatedAt"] = _next_timestamp(current.updatedAt)

        updated = current.model_copy(update=changes)
        self._contents[content_id] = updated
        logger.info(f"Updated content {content_id}")
        return updated


class SQLContentRepository(ContentRepository):
    """Content records in a relational table with an auto-increment id."""

    def __init__(self, database_url: Optional[str] = None):
        self.engine = build_engine(database_url)
        init_db(self.engine)
        self.session_factory = build_session_factory(self.engine)
        logger.info("SQLContentRepository initialized")

    @staticmethod
    def _to_record(row: ContentRow) -> ContentRecord:
        return ContentRecord(
            id=row.id,
            title=row.title,
            contentType=row.content_type,
            content=row.content,
            curriculumId=row.curriculum_id,
            createdAt=row.created_at,
            updatedAt=row.updated_at,
        )

    async def create(self, record: Dict[str, Any]) -> int:
        row = ContentRow(
            title=record["title"],
            content_type=record["contentType"],
            content=record["content"],
            curriculum_id=record["curriculumId"],
            created_at=record.get("createdAt") or utcnow(),
            updated_at=record.get("updatedAt"),
        )
        with session_scope(self.session_factory) as session:
            session.add(row)
            session.flush()
            content_id = row.id
        logger.info(f"Stored content {content_id}: {record['title']}")
        return content_id

    async def get(self, content_id: int) -> Optional[ContentRecord]:
        with session_scope(self.session_factory) as session:
            row = session.get(ContentRow, content_id)
            return self._to_record(row) if row else None

    async def list_all(self) -> List[ContentRecord]:
        with session_scope(self.session_factory) as session:
            rows = session.execute(select(ContentRow).order_by(ContentRow.id)).scalars().all()
            return [self._to_record(row) for row in rows]

    async def list_recent(self, limit: int = 5) -> List[ContentRecord]:
        with session_scope(self.session_factory) as session:
            rows = session.execute(
                select(ContentRow)
                .order_by(ContentRow.created_at.desc(), ContentRow.id.asc())
                .limit(limit)
            ).scalars().all()
            return [self._to_record(row) for row in rows]

    async def update(self, content_id: int, partial: Dict[str, Any]) -> ContentRecord:
        columns = {
            "title": "title",
            "contentType": "content_type",
            "content": "content",
            "curriculumId": "curriculum_id",
            "createdAt": "created_at",
        }
        with session_scope(self.session_factory) as session:
            row = session.get(ContentRow, content_id)
            if row is None:
                raise ContentNotFoundError("Content", content_id)
            for field_name, column in columns.items():
                if field_name in partial:
                    setattr(row, column, partial[field_name])
            row.updated_at = _next_timestamp(row.updated_at)
            session.flush()
            record = self._to_record(row)
        logger.info(f"Updated content {content_id}")
        return record


class CurriculumRepository:
    """Read-mostly curriculum reference data, seeded with one default record."""

    def __init__(self, seed_default: bool = True):
        self._curricula: Dict[int, CurriculumRecord] = {}
        self._current_id = 1
        if seed_default:
            now = utcnow()
            self.create({
                "title": "Web Development Fundamentals",
                "description": "Learn the basics of web development with HTML, CSS, and JavaScript",
                "difficulty": "Beginner",
                "lessons": 10,
                "quizzes": 5,
                "exercises": 8,
                "projects": 2,
                "isRecommended": True,
                "createdAt": now,
                "updatedAt": now,
            })

    def create(self, curriculum: Dict[str, Any]) -> int:
        curriculum_id = self._current_id
        self._current_id += 1
        self._curricula[curriculum_id] = CurriculumRecord(id=curriculum_id, **curriculum)
        return curriculum_id

    def get(self, curriculum_id: int) -> Optional[CurriculumRecord]:
        return self._curricula.get(curriculum_id)

    def list_all(self) -> List[CurriculumRecord]:
        return list(self._curricula.values())


def create_content_repository(backend: Optional[str] = None) -> ContentRepository:
    """Build the content repository selected by STORAGE_BACKEND."""
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "sql":
        return SQLContentRepository()
    if backend == "memory":
        return InMemoryContentRepository()
    raise ValueError(f"Unknown storage backend: {backend}")
