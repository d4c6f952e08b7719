"""
Base Repository - common database operations shared by every repository
"""

from typing import TypeVar, Generic, List, Optional, Dict, Any, Type
from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import SQLAlchemyError
from logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Persistence for one model class over a SQLAlchemy session.

    Repositories flush but never commit on their own; the service that owns
    the unit of work calls commit() once. Reads propagate errors unchanged.
    Writes roll the session back on SQLAlchemyError and re-raise, so a
    failed unit of work never leaves half-applied changes behind.
    """

    def __init__(self, session: Session, model_class: Type[T]):
        self.session = session
        self.model_class = model_class

    def create(self, **kwargs) -> T:
        """
        Add a new entity and flush it so it has an id.

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            entity = self.model_class(**kwargs)
            self.session.add(entity)
            self.session.flush()
            logger.debug("Created entity", model=self.model_class.__name__, entity_id=entity.id)
            return entity
        except SQLAlchemyError as e:
            logger.error("Error creating entity", model=self.model_class.__name__, error=str(e))
            self.session.rollback()
            raise

    def get_by_id(self, entity_id: int) -> Optional[T]:
        return self.session.get(self.model_class, entity_id)

    def find_by(self, **filters) -> List[T]:
        return self._build_query(filters).all()

    def find_one_by(self, **filters) -> Optional[T]:
        return self._build_query(filters).first()

    def update(self, entity: T, **updates) -> T:
        """
        Set attributes on a loaded entity and flush. Names the model does not
        define are skipped.

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            for field, value in updates.items():
                if hasattr(entity, field):
                    setattr(entity, field, value)
            self.session.flush()
            logger.debug("Updated entity", model=self.model_class.__name__, entity_id=entity.id)
            return entity
        except SQLAlchemyError as e:
            logger.error("Error updating entity", model=self.model_class.__name__, error=str(e))
            self.session.rollback()
            raise

    def update_many(self, filters: Dict[str, Any], updates: Dict[str, Any]) -> int:
        """
        Bulk UPDATE of every row matching filters, without loading them.
        Returns the number of rows the database reports as matched.
        """
        try:
            count = self._build_query(filters).update(updates, synchronize_session='fetch')
            self.session.flush()
            logger.debug("Bulk updated entities", model=self.model_class.__name__, count=count)
            return count
        except SQLAlchemyError as e:
            logger.error("Error bulk updating entities", model=self.model_class.__name__, error=str(e))
            self.session.rollback()
            raise

    # Transaction management

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error("Error committing transaction", model=self.model_class.__name__, error=str(e))
            self.session.rollback()
            raise

    def rollback(self) -> None:
        self.session.rollback()

    def _build_query(self, filters: Optional[Dict[str, Any]] = None) -> Query:
        """
        Equality filters, with IN for list values and IS NULL for None.
        Unknown field names are ignored.
        """
        query = self.session.query(self.model_class)

        for field, value in (filters or {}).items():
            column = getattr(self.model_class, field, None)
            if column is None:
                continue
            if isinstance(value, list):
                query = query.filter(column.in_(value))
            elif value is None:
                query = query.filter(column.is_(None))
            else:
                query = query.filter(column == value)

        return query
