from psycopg2 import errorcodes
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from postboard.core.exceptions import ConstraintViolation

_PG_KINDS = {
    errorcodes.UNIQUE_VIOLATION: "unique",
    errorcodes.FOREIGN_KEY_VIOLATION: "foreign_key",
    errorcodes.NOT_NULL_VIOLATION: "not_null",
}

# sqlite3 only reports the failure in the message text
_SQLITE_KINDS = {
    "UNIQUE constraint failed": "unique",
    "FOREIGN KEY constraint failed": "foreign_key",
    "NOT NULL constraint failed": "not_null",
}


def constraint_kind(error: IntegrityError) -> str:
    pgcode = getattr(error.orig, "pgcode", None)
    if pgcode in _PG_KINDS:
        return _PG_KINDS[pgcode]
    text = str(error.orig)
    for marker, kind in _SQLITE_KINDS.items():
        if marker in text:
            return kind
    return "other"


def commit(db: Session) -> None:
    """Commit, translating integrity failures into ConstraintViolation."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConstraintViolation(constraint_kind(e), str(e.orig)) from e
    except SQLAlchemyError:
        db.rollback()
        raise
