"""CLI commands for database management."""

from pathlib import Path
from typing import Annotated, Any

import typer

from ..base import BaseCLI
from ...database import delete_database, initialize_database

db_app = typer.Typer(help="Database management commands.")

DbPathOption = Annotated[
    Path | None,
    typer.Option(
        "--db-path",
        help="Path to SQLite database file (defaults to global config)",
    ),
]


class DatabaseCLI(BaseCLI):
    """CLI helpers for database management."""

    def __init__(self) -> None:
        super().__init__("db")

    def init_db(self, *, db_path: Path | None) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="db init",
            op_callable=lambda: self._init_operation(db_path=db_path),
            pre_message="Initializing database...",
        )

    def delete_db(self, *, db_path: Path | None) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="db delete",
            op_callable=lambda: self._delete_operation(db_path=db_path),
            pre_message="Deleting database...",
        )

    def _init_operation(self, *, db_path: Path | None) -> dict[str, Any]:
        """Apply schema.sql and return a standardized result.

        Raises:
            FileNotFoundError: If schema.sql is missing (handled by handle_cli_operation).
            DatabaseError: If initialization fails (handled by handle_cli_operation).
        """
        initialize_database(db_path=db_path)
        return {"success": True, "message": "Database initialized"}

    def _delete_operation(self, *, db_path: Path | None) -> dict[str, Any]:
        """Delete the database files and return a standardized result.

        Raises:
            DatabaseLockedError: If database is in use (handled by handle_cli_operation).
        """
        removed = delete_database(db_path=db_path)
        return {"success": True, "message": f"Database deleted ({removed} file(s) removed)"}


cli = DatabaseCLI()


@db_app.command("init")
def init_command(db_path: DbPathOption = None) -> None:
    """Create the parcel schema. Safe to run on an existing database."""
    cli.init_db(db_path=db_path)


@db_app.command("delete")
def delete_command(db_path: DbPathOption = None) -> None:
    """Delete the database and associated WAL/SHM files.

    Exits with code 1 if deletion fails (e.g., database is locked).
    """
    cli.delete_db(db_path=db_path)


app = db_app
