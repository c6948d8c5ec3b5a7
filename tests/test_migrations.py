"""Migrations build the same schema as the ORM models and downgrade cleanly."""

import unittest
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from conference.models import Base

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


def _config(connection) -> Config:
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.attributes["connection"] = connection
    return config


class TestMigrations(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
        )

    def tearDown(self) -> None:
        self.engine.dispose()

    def _upgrade(self) -> None:
        with self.engine.begin() as conn:
            command.upgrade(_config(conn), "head")

    def test_upgrade_creates_model_tables(self) -> None:
        self._upgrade()
        tables = set(inspect(self.engine).get_table_names()) - {"alembic_version"}
        self.assertEqual(tables, set(Base.metadata.tables))

    def test_columns_match_models(self) -> None:
        self._upgrade()
        inspector = inspect(self.engine)
        for name, table in Base.metadata.tables.items():
            with self.subTest(table=name):
                migrated = {c["name"] for c in inspector.get_columns(name)}
                self.assertEqual(migrated, set(table.columns.keys()))

    def test_participant_user_id_index_is_unique(self) -> None:
        self._upgrade()
        indexes = {ix["name"]: ix for ix in inspect(self.engine).get_indexes("participants")}
        self.assertTrue(indexes["ix_participants_user_id"]["unique"])

    def test_downgrade_to_base_drops_everything(self) -> None:
        self._upgrade()
        with self.engine.begin() as conn:
            command.downgrade(_config(conn), "base")
        tables = set(inspect(self.engine).get_table_names()) - {"alembic_version"}
        self.assertEqual(tables, set())


if __name__ == "__main__":
    unittest.main()
