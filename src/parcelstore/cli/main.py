from __future__ import annotations

import typer

from .base import configure_logging
from .commands.db import app as db_app
from .commands.parcel import app as parcel_app

configure_logging()
app = typer.Typer(
    help="Parcel store CLI",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(db_app, name="db")
app.add_typer(parcel_app, name="parcel")


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution. May exit with non-zero code on errors.
    """
    app()


if __name__ == "__main__":
    main()
