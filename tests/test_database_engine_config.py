import os


def test_get_engine_kwargs_sqlite_has_check_same_thread(monkeypatch):
    # Import lazily so monkeypatch can affect env usage deterministically.
    from taskmirror.database import database as db

    kwargs = db.get_engine_kwargs("sqlite:///./taskmirror.db")
    assert "connect_args" in kwargs
    assert kwargs["connect_args"]["check_same_thread"] is False
    # SQLite should not require pool sizing knobs.
    assert "pool_size" not in kwargs
    assert "max_overflow" not in kwargs
    assert kwargs["pool_pre_ping"] is True


def test_get_engine_kwargs_postgres_has_conservative_pooling(monkeypatch):
    from taskmirror.database import database as db

    monkeypatch.setenv("DB_POOL_SIZE", "7")
    monkeypatch.setenv("DB_MAX_OVERFLOW", "3")
    monkeypatch.setenv("DB_POOL_TIMEOUT_SEC", "15")

    kwargs = db.get_engine_kwargs("postgresql+psycopg://u:p@localhost:5432/db")
    assert "connect_args" not in kwargs
    assert kwargs["pool_pre_ping"] is True
    assert kwargs["pool_size"] == 7
    assert kwargs["max_overflow"] == 3
    assert kwargs["pool_timeout"] == 15


def test_debug_env_turns_on_echo(monkeypatch):
    from taskmirror.database import database as db

    monkeypatch.setenv("DEBUG", "true")
    assert db.get_engine_kwargs("sqlite://")["echo"] is True


def test_sqlite_url_detection():
    from taskmirror.database import database as db

    assert db._is_sqlite_url("sqlite:///./taskmirror.db") is True
    assert db._is_sqlite_url("postgresql+psycopg://u:p@localhost/db") is False
    assert db._is_sqlite_url(None) is False


def test_init_db_creates_tasks_table_for_sqlite(tmp_path, monkeypatch):
    """init_db() falls back to create_all() on SQLite even when migrations are requested."""
    from sqlalchemy import inspect
    from taskmirror.database import database as db

    engine = db.build_engine(f"sqlite:///{tmp_path / 'init.db'}")
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setenv("RUN_MIGRATIONS", "true")

    db.init_db()

    columns = {c["name"] for c in inspect(engine).get_columns("tasks")}
    assert {"id", "user_id", "title", "due_date", "is_deleted", "created_at"} <= columns
    engine.dispose()


def test_wal_listener_is_scoped_to_sqlite_engines(tmp_path):
    """build_engine() attaches the pragma listener per engine, never to the Engine class."""
    from sqlalchemy import create_engine, event, text
    from sqlalchemy.engine import Engine
    from taskmirror.database import database as db

    built = db.build_engine(f"sqlite:///{tmp_path / 'wal.db'}")
    plain = create_engine(f"sqlite:///{tmp_path / 'plain.db'}")

    assert event.contains(built, "connect", db.set_sqlite_pragmas)
    assert not event.contains(plain, "connect", db.set_sqlite_pragmas)
    assert not event.contains(Engine, "connect", db.set_sqlite_pragmas)

    with built.connect() as conn:
        assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
    with plain.connect() as conn:
        assert conn.execute(text("PRAGMA journal_mode")).scalar() == "delete"
    built.dispose()
    plain.dispose()
