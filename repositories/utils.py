from sqlalchemy.exc import IntegrityError


def violates_constraint(error: IntegrityError, name: str) -> bool:
    """Check whether an integrity error was raised by the named constraint."""
    orig = error.orig
    constraint = getattr(orig, "constraint_name", None)
    if constraint is None and orig is not None:
        # asyncpg errors sit behind the DBAPI adapter exception
        constraint = getattr(orig.__cause__, "constraint_name", None)
    if constraint is not None:
        return constraint == name
    return name in str(orig)
