"""CLI commands for managing parcels."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

import typer

from ..base import BaseCLI
from ...database import transaction
from ...parcels import Parcel, ParcelService, ParcelStatus, ParcelStore
from .db import DbPathOption

parcel_app = typer.Typer(help="Parcel registration and tracking commands.")

NumberArgument = Annotated[int, typer.Argument(help="Parcel number")]


def describe_parcel(parcel: Parcel) -> str:
    return (
        f"#{parcel.number} client={parcel.client} status={parcel.status} "
        f"address={parcel.address!r} created_at={parcel.created_at}"
    )


class ParcelCLI(BaseCLI):
    """CLI helpers for parcel commands.

    Every operation runs inside its own transaction on a fresh connection.
    """

    def __init__(self) -> None:
        super().__init__("parcel")

    def run(
        self,
        *,
        operation: str,
        db_path: Path | None,
        action: Callable[[ParcelService], Any],
    ) -> Any:
        def _op() -> Any:
            with transaction(db_path=db_path) as conn:
                return action(ParcelService(ParcelStore(conn)))

        return self.handle_cli_operation(operation=operation, op_callable=_op)

    def add(self, *, client: int, address: str, db_path: Path | None) -> dict[str, Any]:
        def _action(service: ParcelService) -> dict[str, Any]:
            parcel = service.register(client, address)
            return {"success": True, "message": f"Registered {describe_parcel(parcel)}"}

        return self.run(operation="parcel add", db_path=db_path, action=_action)

    def show(self, *, number: int, db_path: Path | None) -> str:
        return self.run(
            operation="parcel show",
            db_path=db_path,
            action=lambda service: describe_parcel(service.store.get(number)),
        )

    def list_client(self, *, client: int, db_path: Path | None) -> dict[str, Any]:
        def _action(service: ParcelService) -> dict[str, Any]:
            parcels = service.client_parcels(client)
            return {
                "success": True,
                "message": f"{len(parcels)} parcel(s) for client {client}",
                "items": [describe_parcel(p) for p in parcels],
            }

        return self.run(operation="parcel list", db_path=db_path, action=_action)

    def set_address(self, *, number: int, address: str, db_path: Path | None) -> dict[str, Any]:
        def _action(service: ParcelService) -> dict[str, Any]:
            service.change_address(number, address)
            return {"success": True, "message": f"Parcel {number} address set to {address!r}"}

        return self.run(operation="parcel set-address", db_path=db_path, action=_action)

    def set_status(self, *, number: int, status: ParcelStatus, db_path: Path | None) -> dict[str, Any]:
        def _action(service: ParcelService) -> dict[str, Any]:
            service.store.set_status(number, status)
            return {"success": True, "message": f"Parcel {number} status set to {status}"}

        return self.run(operation="parcel set-status", db_path=db_path, action=_action)

    def next_status(self, *, number: int, db_path: Path | None) -> dict[str, Any]:
        def _action(service: ParcelService) -> dict[str, Any]:
            status = service.next_status(number)
            return {"success": True, "message": f"Parcel {number} is now {status}"}

        return self.run(operation="parcel next-status", db_path=db_path, action=_action)

    def delete(self, *, number: int, db_path: Path | None) -> dict[str, Any]:
        def _action(service: ParcelService) -> dict[str, Any]:
            service.delete(number)
            return {"success": True, "message": f"Parcel {number} deleted"}

        return self.run(operation="parcel delete", db_path=db_path, action=_action)


cli = ParcelCLI()


@parcel_app.command("add")
def add_command(
    client: Annotated[int, typer.Option("--client", "-c", help="Owning client id")],
    address: Annotated[str, typer.Option("--address", "-a", help="Delivery address")],
    db_path: DbPathOption = None,
) -> None:
    """Register a new parcel for a client."""
    cli.add(client=client, address=address, db_path=db_path)


@parcel_app.command("show")
def show_command(number: NumberArgument, db_path: DbPathOption = None) -> None:
    """Show a single parcel."""
    cli.show(number=number, db_path=db_path)


@parcel_app.command("list")
def list_command(
    client: Annotated[int, typer.Option("--client", "-c", help="Owning client id")],
    db_path: DbPathOption = None,
) -> None:
    """List every parcel owned by a client."""
    cli.list_client(client=client, db_path=db_path)


@parcel_app.command("set-address")
def set_address_command(
    number: NumberArgument,
    address: Annotated[str, typer.Argument(help="New delivery address")],
    db_path: DbPathOption = None,
) -> None:
    """Change the address of a parcel that has not been sent yet."""
    cli.set_address(number=number, address=address, db_path=db_path)


@parcel_app.command("set-status")
def set_status_command(
    number: NumberArgument,
    status: Annotated[ParcelStatus, typer.Argument(help="New status")],
    db_path: DbPathOption = None,
) -> None:
    """Set a parcel's status directly, without transition checks."""
    cli.set_status(number=number, status=status, db_path=db_path)


@parcel_app.command("next-status")
def next_status_command(number: NumberArgument, db_path: DbPathOption = None) -> None:
    """Advance a parcel: registered -> sent -> delivered."""
    cli.next_status(number=number, db_path=db_path)


@parcel_app.command("delete")
def delete_command(number: NumberArgument, db_path: DbPathOption = None) -> None:
    """Delete a parcel that has not been sent yet."""
    cli.delete(number=number, db_path=db_path)


app = parcel_app
