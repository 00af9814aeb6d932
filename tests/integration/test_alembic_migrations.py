from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect


def _make_alembic_config(database_url: str) -> Config:
    """Return an Alembic config pointing at the project migrations."""
    root = Path(__file__).resolve().parents[2]
    cfg = Config(str(root / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    cfg.set_main_option("script_location", str(root / "migrations"))
    return cfg


def test_alembic_upgrade_and_downgrade_cycle(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    monkeypatch.delenv("TEST_DATABASE_URL", raising=False)
    monkeypatch.setenv("DATABASE_URL", url)
    cfg = _make_alembic_config(url)

    command.upgrade(cfg, "head")
    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert {"post", "comment"} <= set(inspector.get_table_names())
        assert {c["name"] for c in inspector.get_columns("comment")} == {"id", "content", "rank", "post_id"}

        command.downgrade(cfg, "base")
        assert not {"post", "comment"} & set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
