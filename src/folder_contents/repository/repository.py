"""Base repository with shared query execution."""

from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from loguru import logger
from sqlalchemy import Executable, Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from folder_contents import db
from folder_contents.models import Base
from folder_contents.services.exceptions import StoreFailure

T = TypeVar("T", bound=Base)


class Repository(Generic[T]):
    """Base repository with shared query execution and inserts.

    Every store error is raised as StoreFailure so callers never see
    driver-specific exceptions.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession], Model: Type[T]):
        self.session_maker = session_maker
        self.Model = Model

    async def execute_query(self, query: Executable, params: Optional[dict] = None) -> Result[Any]:
        """Execute a query and return a buffered result."""
        try:
            async with db.scoped_session(self.session_maker) as session:
                result = await session.execute(query, params or {})
                return result
        except SQLAlchemyError as e:
            logger.debug(f"Query failed on {self.Model.__name__}: {type(e).__name__}")
            raise StoreFailure(f"Store query failed: {type(e).__name__}") from e

    async def add_all(self, models: List[T]) -> Sequence[T]:
        """Persist several new rows in one transaction."""
        try:
            async with db.scoped_session(self.session_maker) as session:
                session.add_all(models)
                await session.flush()
                return models
        except SQLAlchemyError as e:
            logger.debug(f"Insert failed on {self.Model.__name__}: {type(e).__name__}")
            raise StoreFailure(f"Store write failed: {type(e).__name__}") from e
