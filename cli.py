"""CLI commands for event guest management."""

import asyncio
from datetime import datetime
from uuid import UUID

import typer

from src.config.database import async_session_manager
from src.config.logging import setup_logging
from src.guests.dtos import GuestDTO, RSVPStatus
from src.guests.errors import GuestServiceError
from src.guests.features.update_rsvp.write_model import SqlRSVPWriteModel
from src.guests.repository.read_models import SqlGuestReadModel
from src.guests.repository.write_models import SqlGuestGroupWriteModel, SqlGuestWriteModel
from src.guests.stats import compute_guest_stats, compute_invitation_summary
from src.models.event import Event

app = typer.Typer(help="CLI commands for event guest management")

STATUS_COLORS = {
    RSVPStatus.PENDING: typer.colors.YELLOW,
    RSVPStatus.CONFIRMED: typer.colors.GREEN,
    RSVPStatus.DECLINED: typer.colors.RED,
    RSVPStatus.MAYBE: typer.colors.MAGENTA,
}


@app.callback()
def main():
    setup_logging()


def run(coro):
    """Run a store coroutine, turning store errors into a red message and exit code 1."""
    try:
        return asyncio.run(coro)
    except GuestServiceError as e:
        typer.secho(e.message, fg=typer.colors.RED)
        raise typer.Exit(1)


def echo_guest(guest: GuestDTO) -> None:
    typer.secho(f"  {guest.name} <{guest.email}>", fg=typer.colors.BLUE, nl=False)
    status = RSVPStatus(guest.rsvp_status)
    typer.secho(f"  [{status.value}]", fg=STATUS_COLORS[status])
    typer.secho(f"    ID: {guest.id}", fg=typer.colors.CYAN)


async def _create_event(name: str, date: datetime | None, location: str | None) -> Event:
    async with async_session_manager() as session:
        event = Event(name=name, date=date, location=location)
        session.add(event)
        await session.flush()
        return event


@app.command()
def create_event(
    name: str = typer.Argument(..., help="Event name"),
    date: datetime = typer.Option(None, "--date", "-d", help="When the event takes place"),
    location: str = typer.Option(None, "--location", "-l", help="Where the event takes place"),
):
    """Create an event to attach guests and groups to."""
    event = run(_create_event(name, date, location))

    typer.secho("Event created!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {event.name}", fg=typer.colors.BLUE)
    typer.secho(f"  Event ID: {event.id}", fg=typer.colors.CYAN)


@app.command()
def create_guest(
    event_id: UUID = typer.Argument(..., help="Event UUID"),
    name: str = typer.Argument(..., help="Guest name"),
    email: str = typer.Argument(..., help="Guest email"),
    phone: str = typer.Option(None, "--phone", "-p", help="Phone number"),
    group: str = typer.Option(None, "--group", "-g", help="Free-text group category"),
    group_id: UUID = typer.Option(None, "--group-id", help="Guest group UUID"),
    notes: str = typer.Option(None, "--notes", "-n", help="Notes about the guest"),
):
    """Add a guest to an event. New guests are pending and not yet invited."""
    guest = run(
        SqlGuestWriteModel().create_guest(
            event_id=event_id,
            name=name,
            email=email,
            phone=phone,
            group_category=group,
            group_id=group_id,
            notes=notes,
        )
    )

    typer.secho("Guest created!", fg=typer.colors.GREEN)
    echo_guest(guest)


@app.command()
def list_guests(
    event_id: UUID = typer.Argument(..., help="Event UUID"),
    search: str = typer.Option("", "--search", "-s", help="Match on name or email"),
    status: RSVPStatus = typer.Option(None, "--status", help="Only guests with this RSVP status"),
):
    """List an event's guests ordered by name."""
    guests = run(SqlGuestReadModel().list_guests(event_id, search=search, status=status))

    if not guests:
        typer.secho("No guests found", fg=typer.colors.YELLOW)
        return
    typer.secho(f"{len(guests)} guest(s)", fg=typer.colors.GREEN)
    for guest in guests:
        echo_guest(guest)


@app.command()
def set_rsvp(
    guest_id: UUID = typer.Argument(..., help="Guest UUID"),
    status: RSVPStatus = typer.Argument(..., help="New RSVP status"),
):
    """Set a guest's RSVP status."""
    guest = run(SqlRSVPWriteModel().set_rsvp_status(guest_id, status))

    typer.secho("RSVP updated!", fg=typer.colors.GREEN)
    echo_guest(guest)


@app.command()
def delete_guest(
    guest_id: UUID = typer.Argument(..., help="Guest UUID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Permanently delete a guest."""
    if not yes:
        typer.confirm(f"Permanently delete guest {guest_id}?", abort=True)

    run(SqlGuestWriteModel().delete_guest(guest_id))
    typer.secho(f"Guest {guest_id} deleted", fg=typer.colors.GREEN)


@app.command()
def create_group(
    event_id: UUID = typer.Argument(..., help="Event UUID"),
    name: str = typer.Argument(..., help="Group name"),
    color: str = typer.Option("#3B82F6", "--color", "-c", help="Display color"),
    sort_order: int = typer.Option(None, "--sort-order", help="Position among the groups"),
):
    """Create a guest group for an event."""
    group = run(
        SqlGuestGroupWriteModel().create_group(
            event_id=event_id, name=name, color=color, sort_order=sort_order
        )
    )

    typer.secho("Group created!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {group.name} ({group.color})", fg=typer.colors.BLUE)
    typer.secho(f"  Sort order: {group.sort_order}", fg=typer.colors.BLUE)
    typer.secho(f"  Group ID: {group.id}", fg=typer.colors.CYAN)


@app.command()
def delete_group(
    group_id: UUID = typer.Argument(..., help="Guest group UUID"),
):
    """Delete a guest group. Its guests stay in the event."""
    run(SqlGuestGroupWriteModel().delete_group(group_id))
    typer.secho(f"Group {group_id} deleted", fg=typer.colors.GREEN)


@app.command()
def stats(
    event_id: UUID = typer.Argument(..., help="Event UUID"),
):
    """Show RSVP counts and invitation progress for an event."""
    guests = run(SqlGuestReadModel().list_guests(event_id))
    guest_stats = compute_guest_stats(guests)
    summary = compute_invitation_summary(guests)

    typer.secho(f"Guests: {guest_stats.total}", fg=typer.colors.GREEN)
    typer.secho(f"  Confirmed: {guest_stats.confirmed}", fg=typer.colors.GREEN)
    typer.secho(f"  Maybe: {guest_stats.maybe}", fg=typer.colors.MAGENTA)
    typer.secho(f"  Pending: {guest_stats.pending}", fg=typer.colors.YELLOW)
    typer.secho(f"  Declined: {guest_stats.declined}", fg=typer.colors.RED)
    typer.echo()
    typer.secho(
        f"Invitations sent: {summary.sent}/{summary.total} "
        f"({summary.response_rate}% responded)",
        fg=typer.colors.CYAN,
    )


if __name__ == "__main__":
    app()
