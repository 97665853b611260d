"""Guard that keeps destructive integration fixtures away from real databases."""

from __future__ import annotations

from sqlalchemy.engine import make_url

DISPOSABLE_DB_SUFFIXES = ("_test", "_tests", "_ci")
LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})
COMPOSE_DB_HOSTS = frozenset({"postgres", "db", "course_quiz_postgres"})


def unsafe_database_reason(database_url: str) -> str | None:
    """Return why ``database_url`` must not be wiped, or None when it is disposable."""
    url = make_url(database_url)
    if url.get_backend_name() != "postgresql":
        return f"backend '{url.get_backend_name()}' is not PostgreSQL"

    name = (url.database or "").strip().lower()
    if not name:
        return "database name is empty"
    if not name.endswith(DISPOSABLE_DB_SUFFIXES):
        return f"database '{name}' does not end with one of {', '.join(DISPOSABLE_DB_SUFFIXES)}"

    host = (url.host or "localhost").strip().lower()
    if host not in LOOPBACK_HOSTS | COMPOSE_DB_HOSTS:
        return f"host '{host}' is not a local or compose database host"
    return None


def require_disposable_database(database_url: str) -> None:
    reason = unsafe_database_reason(database_url)
    if reason is None:
        return
    raise RuntimeError(
        f"Refusing to truncate quiz tables: {reason}. "
        "Point DATABASE_URL at a throwaway database such as 'course_quiz_test'."
    )
