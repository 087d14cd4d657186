import logging
from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar

import pydantic
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from medportal.core.errors import (
    CollaboratorError,
    MalformedRecordError,
    RecordConflict,
    RecordNotFound,
)

logger = logging.getLogger(__name__)

ORMType = TypeVar("ORMType")
SchemaType = TypeVar("SchemaType", bound=pydantic.BaseModel)


def parse_record(schema: Type[SchemaType], obj: Any) -> SchemaType:
    """Convert an ORM row into its typed record, rejecting rows that don't fit."""
    try:
        return schema.model_validate(obj)
    except pydantic.ValidationError as e:
        logger.error("Malformed %s row %r: %s", schema.__name__, obj, e)
        raise MalformedRecordError(
            f"Stored record could not be read as {schema.__name__}."
        ) from e


def parse_records(schema: Type[SchemaType], objs: Iterable[Any]) -> List[SchemaType]:
    return [parse_record(schema, obj) for obj in objs]


class RecordRepository(Generic[ORMType]):
    """
    List/get/insert/update/delete over one table. Store failures are rolled
    back and re-raised as the portal's CollaboratorError family.
    """

    model: Type[ORMType]
    label: str = "record"
    order_by: tuple = ()

    def __init__(self, db: Session):
        """Initializes the repository with a database session."""
        self.db = db

    # --- reads ---

    def list_all(self) -> List[ORMType]:
        stmt = select(self.model).order_by(*self._ordering())
        return self._scalars(stmt)

    def filter_by(self, **criteria) -> List[ORMType]:
        """Filter on column equality, e.g. filter_by(brand_id=...)."""
        stmt = select(self.model).filter_by(**criteria).order_by(*self._ordering())
        return self._scalars(stmt)

    def get_by_id(self, record_id: str) -> Optional[ORMType]:
        try:
            return self.db.get(self.model, record_id)
        except SQLAlchemyError as e:
            logger.error("Failed to load %s %s: %s", self.label, record_id, e)
            raise CollaboratorError() from e

    def require(self, record_id: str) -> ORMType:
        record = self.get_by_id(record_id)
        if record is None:
            raise RecordNotFound(self.label, record_id)
        return record

    def require_all(self, record_ids: Iterable[str]) -> List[ORMType]:
        """Resolve ids in the given order; the first unknown id raises RecordNotFound."""
        return [self.require(record_id) for record_id in record_ids]

    # --- writes ---

    def insert(self, **values) -> ORMType:
        record = self.model(**values)
        self.db.add(record)
        self.commit()
        self.db.refresh(record)
        return record

    def update(self, record_id: str, **changes) -> ORMType:
        record = self.require(record_id)
        for name, value in changes.items():
            setattr(record, name, value)
        self.commit()
        self.db.refresh(record)
        return record

    def delete(self, record_id: str) -> None:
        record = self.require(record_id)
        self.db.delete(record)
        self.commit()

    def commit(self) -> None:
        """Commit the unit of work; on failure roll back and translate the error."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Integrity error writing %s: %s", self.label, str(e).splitlines()[0])
            raise RecordConflict(
                f"The {self.label} conflicts with existing data "
                "(duplicate value or record still in use)."
            ) from e
        except OperationalError as e:
            self.db.rollback()
            logger.error("Record store operational error: %s", e)
            raise CollaboratorError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Unexpected SQLAlchemy error writing %s: %s", self.label, e)
            raise CollaboratorError(
                f"An unexpected error occurred while saving the {self.label}."
            ) from e

    # --- helpers ---

    def _ordering(self) -> tuple:
        return self.order_by or (self.model.id,)

    def _scalars(self, stmt) -> List[ORMType]:
        try:
            return list(self.db.scalars(stmt).unique().all())
        except SQLAlchemyError as e:
            logger.error("Failed to list %s records: %s", self.label, e)
            raise CollaboratorError() from e
