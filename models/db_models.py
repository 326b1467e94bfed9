"""SQLAlchemy tables backing the SQL content store."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from config.database import Base


class ContentRow(Base):
    __tablename__ = "contents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content_type = Column(String(64), nullable=False)
    content = Column(Text, nullable=False)
    curriculum_id = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)
