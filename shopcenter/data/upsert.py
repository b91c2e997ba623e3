# shopcenter/data/upsert.py
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_insert(db: Session, model):
    """INSERT construct supporting ON CONFLICT for the session's backend."""
    name = db.get_bind().dialect.name
    try:
        return _INSERTS[name](model)
    except KeyError:
        raise RuntimeError(f"ON CONFLICT upserts are not supported on '{name}'") from None
