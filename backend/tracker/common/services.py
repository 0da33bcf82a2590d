from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase
from tracker.common.exceptions import ResourceNotFoundError
from typing import TypeVar, Generic, Type


ModelType = TypeVar("ModelType", bound=DeclarativeBase)

class AppService(Generic[ModelType]):
    """
    Base service class that provides common functionality 
    like session management and generic lookups.
    """
    
    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def get_by_id(self, id: int) -> ModelType:
        stmt = select(self.model).where(self.model.id == id)
        result = await self.session.execute(stmt)
        obj = result.scalar_one_or_none()

        if not obj:
            raise ResourceNotFoundError(self.model.__name__, id)
        
        return obj

    async def _save(self, db_obj: ModelType) -> ModelType:
        """
        Add the object to the session and commit, rolling back on integrity errors.

        Args:
            db_obj: New or modified model instance

        Returns:
            The refreshed instance
        """
        self.session.add(db_obj)
        try:
            await self.session.commit()
            await self.session.refresh(db_obj)
        except IntegrityError as e:
            await self.session.rollback()
            raise e
        return db_obj

    async def _remove(self, db_obj: ModelType) -> None:
        await self.session.delete(db_obj)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise e

