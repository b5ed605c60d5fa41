"""
ORM models for the planning entities read by search and the resource catalog.

Only the columns the search core and catalog consume are mapped here:
identifiers, human reference IDs, text fields used by the full-text index,
priority/status, ownership and the foreign keys used for filtering.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, Uuid

from ..database.database import Base


def _utc_now() -> datetime:
    """Return timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


class Epic(Base):
    """High-level initiative broken down into user stories (EP-NNN)."""

    __tablename__ = "epics"

    # Columns concatenated into the text-search document, in order
    search_columns = ("reference_id", "title", "description")

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reference_id = Column(String(32), nullable=False, unique=True, index=True)
    creator_id = Column(Uuid, nullable=False, index=True)
    assignee_id = Column(Uuid, nullable=True, index=True)
    priority = Column(Integer, nullable=False)  # 1 = Critical ... 4 = Low
    status = Column(String(50), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, onupdate=_utc_now)


class UserStory(Base):
    """User story belonging to an epic (US-NNN)."""

    __tablename__ = "user_stories"

    search_columns = ("reference_id", "title", "description")

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reference_id = Column(String(32), nullable=False, unique=True, index=True)
    epic_id = Column(Uuid, ForeignKey("epics.id", ondelete="CASCADE"), nullable=False, index=True)
    creator_id = Column(Uuid, nullable=False, index=True)
    assignee_id = Column(Uuid, nullable=True, index=True)
    priority = Column(Integer, nullable=False)
    status = Column(String(50), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, onupdate=_utc_now)


class AcceptanceCriteria(Base):
    """
    Acceptance criterion attached to a user story (AC-NNN).

    Has no title, priority or status; search reports the reference ID as
    title and "active" as status.
    """

    __tablename__ = "acceptance_criteria"

    search_columns = ("reference_id", "description")

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reference_id = Column(String(32), nullable=False, unique=True, index=True)
    user_story_id = Column(Uuid, ForeignKey("user_stories.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Uuid, nullable=False, index=True)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, onupdate=_utc_now)


class RequirementType(Base):
    """Classification for requirements (Functional, Non-Functional, ...)."""

    __tablename__ = "requirement_types"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, onupdate=_utc_now)


class Requirement(Base):
    """Requirement derived from a user story (REQ-NNN)."""

    __tablename__ = "requirements"

    search_columns = ("reference_id", "title", "description")

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reference_id = Column(String(32), nullable=False, unique=True, index=True)
    user_story_id = Column(Uuid, ForeignKey("user_stories.id", ondelete="CASCADE"), nullable=False, index=True)
    acceptance_criteria_id = Column(
        Uuid, ForeignKey("acceptance_criteria.id", ondelete="SET NULL"), nullable=True, index=True
    )
    type_id = Column(Uuid, ForeignKey("requirement_types.id", ondelete="RESTRICT"), nullable=False, index=True)
    creator_id = Column(Uuid, nullable=False, index=True)
    assignee_id = Column(Uuid, nullable=True, index=True)
    priority = Column(Integer, nullable=False)
    status = Column(String(50), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, onupdate=_utc_now)
