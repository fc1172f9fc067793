"""
Base repository class providing common database operations.

This class serves as a reusable foundation for repositories that interact with
the database using SQLAlchemy's async sessions.

Repositories only `flush()`. Committing (and therefore the transaction boundary) belongs to the
service layer, so a service can run a pre-check and a write in one unit of work.

Every SQL call runs inside `db_error_handler`: a driver fault rolls the session back and is
re-raised as a classified `StorageError` subclass. Expected "not there" outcomes return `None`
or `False`; nothing here builds HTTP responses.
"""
import logging
import time
from typing import Generic, Type, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.base import Base
from ..exceptions.mapper import db_error_handler

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

module_logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession, logger: logging.Logger | None = None):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class (e.g. `Account`, not `Account()`), used to build
                queries dynamically: select(self.model), update(self.model), ...
            db: The async database session (usually injected via a FastAPI dependency)
            logger: Logger for repository events. Defaults to this module's logger.
        """
        self.model = model
        self.db = db
        self.logger = logger or module_logger

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Create Operations
    # =================================================================================================================

    async def save(self, entity: ModelType) -> ModelType:
        """
        Add an already-built entity to the session and flush it, so the storage-assigned id is
        available to the caller. No pre-checks: constraint violations surface as StorageError
        subclasses (UniqueConstraintError, ForeignKeyConstraintError, ...).
        """
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model_name):
            self.db.add(entity)
            await self.db.flush()
            await self.db.refresh(entity)

        self.logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read Operations (Single Entity)
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an entity by its ID. Returns None when no row matches.
        """
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(select(self.model).where(self.model.id == entity_id))
            # scalar_one_or_none(): 0 or 1 rows expected for a primary key filter
            entity = result.scalar_one_or_none()

        self.logger.debug(
            "repo.get_by_id",
            extra={"model": self.model_name, "id": entity_id, "found": entity is not None},
        )
        return entity

    # =================================================================================================================
    # Read Operations (Multiple Entities)
    # =================================================================================================================

    async def get_all(self) -> list[ModelType]:
        """Get all entities in ascending id order."""
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(select(self.model).order_by(self.model.id))
            entities = list(result.scalars().all())

        self.logger.debug("repo.get_all", extra={"model": self.model_name, "count": len(entities)})
        return entities

    # =================================================================================================================
    # Update / Delete Operations
    # =================================================================================================================

    async def update(self, entity_id: int, **values) -> ModelType | None:
        """
        Update an entity by its ID with a single UPDATE statement.

        Returns:
            The updated entity if found, None otherwise
        """
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(stmt)

        if result.rowcount == 0:
            self.logger.info("repo.update.not_found", extra={"model": self.model_name, "id": entity_id})
            return None

        self.logger.debug(
            "repo.update.success",
            extra={"model": self.model_name, "id": entity_id, "fields": sorted(values)},
        )
        return await self.get_by_id(entity_id)

    async def delete(self, entity_id: int) -> bool:
        """
        Delete an entity by its ID.

        Returns:
            True if the entity was deleted, False if not found
        """
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(delete(self.model).where(self.model.id == entity_id))

        deleted = result.rowcount > 0
        self.logger.debug("repo.delete", extra={"model": self.model_name, "id": entity_id, "deleted": deleted})
        return deleted

    # =================================================================================================================
    # Utility Operations
    # =================================================================================================================

    async def exists(self, entity_id: int) -> bool:
        """Check if an entity exists by its ID."""
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(select(self.model.id).where(self.model.id == entity_id))
            return result.scalar() is not None

