"""
Base repository providing common persistence plumbing.
"""

from typing import Generic, TypeVar, Optional, Type
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Generic base repository over one SQLAlchemy record class.

    Every public operation of a subclass is a single transaction: it either
    commits or rolls back and raises PersistenceError.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def _get_record(self, id: str) -> Optional[T]:
        """
        Retrieve a record by its ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found

        Raises:
            PersistenceError: If the query fails
        """
        try:
            return self.db.query(self.model).filter(self.model.id == id).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError('find', f"Failed to read {self.model.__tablename__} {id}: {e}") from e

    def _add(self, record: T, operation: str = 'insert') -> T:
        """
        Add and commit a new record.

        Raises:
            PersistenceError: On constraint violations or backend failure
        """
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{operation} into {self.model.__tablename__} failed: {e}")
            raise PersistenceError(
                operation,
                f"Failed to {operation} {self.model.__tablename__} {getattr(record, 'id', '')}: {e}",
            ) from e
        return record

    def _commit(self, operation: str) -> None:
        """
        Commit pending changes.

        Raises:
            PersistenceError: On backend failure
        """
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{operation} on {self.model.__tablename__} failed: {e}")
            raise PersistenceError(operation, f"Failed to {operation} {self.model.__tablename__}: {e}") from e

    def count(self) -> int:
        """
        Count total records.

        Returns:
            Total number of records

        Raises:
            PersistenceError: If the query fails
        """
        try:
            return self.db.query(self.model).count()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError('count', f"Failed to count {self.model.__tablename__}: {e}") from e
