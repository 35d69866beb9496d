from sqlalchemy.dialects import postgresql, sqlite

# both dialects support INSERT ... ON CONFLICT
_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def conflict_insert(session, model):
    """INSERT for `model`'s table that accepts on_conflict_do_update / _do_nothing."""
    dialect = session.get_bind().dialect.name
    try:
        insert = _INSERTS[dialect]
    except KeyError:
        raise RuntimeError(f"Upserts are not supported on {dialect}")
    return insert(model.__table__)
