"""
Entity repositories backed by PostgreSQL.

Each repository wraps one ORM model and exposes the read operations the
search core and resource catalog need:
- list: ordered, bounded listing for the resource catalog
- filter: predicate-only retrieval (unranked search path)
- text_search: full-text match with ts_rank relevance (ranked search path)
- get_by_reference_id: case-insensitive reference ID lookup
- exists: primary-key existence check

Every call opens its own session from the shared factory, so a repository
can be used by concurrently running adapters.
"""

import logging
from dataclasses import dataclass
from functools import reduce
from typing import Any, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import func, literal, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..models.entities import AcceptanceCriteria, Epic, Requirement, RequirementType, UserStory
from ..services.search.components.filters import FilterPredicate
from ..services.search.errors import EntityNotFoundError

logger = logging.getLogger(__name__)

# PostgreSQL text search configuration used for both document and query
TEXT_SEARCH_CONFIG = "english"


class SQLAlchemyEntityRepository:
    """
    Read-only repository for one entity table.

    Args:
        session_factory: async_sessionmaker shared across repositories
        model: ORM model class
        entity_type: Entity kind name used in errors and logs
    """

    def __init__(self, session_factory: async_sessionmaker, model, entity_type: str):
        self.session_factory = session_factory
        self.model = model
        self.entity_type = entity_type

    def _search_document(self):
        """reference_id || ' ' || title || ' ' || COALESCE(description, '')"""
        columns = getattr(self.model, "search_columns", ("reference_id",))
        parts = [func.coalesce(getattr(self.model, name), "") for name in columns]
        return reduce(lambda left, right: left + literal(" ") + right, parts)

    async def list(
        self,
        limit: int = 1000,
        offset: int = 0,
        order_by: str = "created_at",
        ascending: bool = True
    ) -> List[Any]:
        """
        List entities in a fixed order.

        Args:
            limit: Maximum rows to return
            offset: Rows to skip
            order_by: Column to order by
            ascending: Sort direction

        Returns:
            List of ORM instances
        """
        column = getattr(self.model, order_by)
        stmt = (
            select(self.model)
            .order_by(column.asc() if ascending else column.desc(), self.model.id.asc())
            .limit(limit)
            .offset(offset)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def filter(self, predicates: Sequence[FilterPredicate]) -> List[Any]:
        """
        Retrieve every entity matching all predicates.

        Args:
            predicates: AND-composed filter predicates

        Returns:
            List of ORM instances
        """
        stmt = select(self.model).where(*[p.to_clause(self.model) for p in predicates])
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def text_search(
        self,
        expression: str,
        predicates: Sequence[FilterPredicate]
    ) -> List[Tuple[Any, float]]:
        """
        Full-text match ranked by ts_rank.

        Args:
            expression: tsquery expression (e.g. "payment:* & gateway:*"),
                bound as a parameter
            predicates: AND-composed filter predicates

        Returns:
            List of (ORM instance, relevance) pairs
        """
        vector = func.to_tsvector(TEXT_SEARCH_CONFIG, self._search_document())
        tsquery = func.to_tsquery(TEXT_SEARCH_CONFIG, expression)
        relevance = func.ts_rank(vector, tsquery).label("relevance")

        stmt = (
            select(self.model, relevance)
            .where(vector.op("@@")(tsquery))
            .where(*[p.to_clause(self.model) for p in predicates])
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [(entity, float(rank or 0.0)) for entity, rank in result.all()]

    async def get_by_reference_id(self, reference_id: str) -> Any:
        """
        Case-insensitive reference ID lookup.

        Raises:
            EntityNotFoundError: If no entity carries the reference ID
        """
        cleaned = reference_id.strip()
        stmt = select(self.model).where(func.upper(self.model.reference_id) == cleaned.upper())
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            entity = result.scalars().first()

        if entity is None:
            raise EntityNotFoundError(self.entity_type, cleaned)
        return entity

    async def exists(self, entity_id: UUID) -> bool:
        """Check whether an entity with the given primary key exists."""
        stmt = select(self.model.id).where(self.model.id == entity_id).limit(1)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none() is not None


@dataclass
class Repositories:
    """Repository set handed to the search adapters and resource providers."""
    epic: SQLAlchemyEntityRepository
    user_story: SQLAlchemyEntityRepository
    acceptance_criteria: SQLAlchemyEntityRepository
    requirement: SQLAlchemyEntityRepository
    requirement_type: Optional[SQLAlchemyEntityRepository] = None


def build_repositories(session_factory: async_sessionmaker) -> Repositories:
    """
    Create one repository per entity table.

    Args:
        session_factory: Shared async session factory

    Returns:
        Repositories bundle
    """
    repositories = Repositories(
        epic=SQLAlchemyEntityRepository(session_factory, Epic, "epic"),
        user_story=SQLAlchemyEntityRepository(session_factory, UserStory, "user_story"),
        acceptance_criteria=SQLAlchemyEntityRepository(
            session_factory, AcceptanceCriteria, "acceptance_criteria"
        ),
        requirement=SQLAlchemyEntityRepository(session_factory, Requirement, "requirement"),
        requirement_type=SQLAlchemyEntityRepository(session_factory, RequirementType, "requirement_type"),
    )
    logger.info("Entity repositories initialized")
    return repositories
