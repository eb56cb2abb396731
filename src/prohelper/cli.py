"""Command-line interface for ProHelper contractor invitations.

Provides commands to sign in with a bearer token and to list, inspect,
accept and decline incoming contractor invitations.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import NoReturn, TypeVar

import click

from prohelper import __version__
from prohelper.application.services import (
    InvitationActionController,
    InvitationDetailsController,
    InvitationListController,
    InvitationStatsController,
    NotificationAggregator,
)
from prohelper.core.config import Settings, get_settings
from prohelper.core.logging import configure_logging
from prohelper.domain.entities import (
    AcceptResult,
    Counters,
    Invitation,
    InvitationFilters,
    InvitationStatus,
    as_percent,
)
from prohelper.domain.services.expiry_calculator import time_until_expiry
from prohelper.infrastructure.api import HttpInvitationGateway
from prohelper.infrastructure.auth import FileCredentialProvider


T = TypeVar("T")


def build_gateway(settings: Settings) -> HttpInvitationGateway:
    """Create the HTTP gateway using the cached file credential."""
    credentials = FileCredentialProvider(settings.credential_file)
    credentials.add_invalidation_listener(
        lambda: click.echo("Session expired. Run 'prohelper login TOKEN' to sign in again.", err=True)
    )
    return HttpInvitationGateway.from_settings(settings, credentials)


def _run(
    settings: Settings, action: Callable[[HttpInvitationGateway], Awaitable[T]]
) -> T:
    async def runner() -> T:
        gateway = build_gateway(settings)
        try:
            return await action(gateway)
        finally:
            await gateway.aclose()

    return asyncio.run(runner())


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _format_row(invitation: Invitation, now: datetime) -> str:
    expiry = time_until_expiry(invitation.expires_at, now) if invitation.is_pending else "-"
    return (
        f"{invitation.id:>6}  {invitation.status.label:<18}  "
        f"{invitation.from_organization.name:<30}  {expiry:<8}  {invitation.token or ''}"
    )


def _format_counters(title: str, counters: Counters) -> str:
    return (
        f"{title}\n"
        f"  Total:    {counters.total}\n"
        f"  Pending:  {counters.pending} ({as_percent(counters.pending_rate)}%)\n"
        f"  Accepted: {counters.accepted} ({as_percent(counters.success_rate)}% success)\n"
        f"  Declined: {counters.declined} ({as_percent(counters.decline_rate)}%)"
    )


@click.group()
@click.version_option(version=__version__, prog_name="ProHelper")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides environment)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """ProHelper - contractor invitation management."""
    settings = get_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)
    ctx.obj = settings


@cli.command()
@click.argument("token")
@click.pass_obj
def login(settings: Settings, token: str) -> None:
    """Store a bearer TOKEN for later commands."""
    try:
        FileCredentialProvider(settings.credential_file).store(token)
    except ValueError as e:
        _fail(str(e))
    click.echo("Signed in.")


@cli.command()
@click.pass_obj
def logout(settings: Settings) -> None:
    """Forget the stored bearer token."""
    FileCredentialProvider(settings.credential_file).invalidate()
    click.echo("Signed out.")


@cli.command(name="list")
@click.option(
    "--status",
    type=click.Choice([status.value for status in InvitationStatus]),
    default=None,
    help="Only show invitations in this status",
)
@click.option("--from", "date_from", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--to", "date_to", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--per-page", type=click.IntRange(min=1), default=None)
@click.option("--all", "load_all", is_flag=True, help="Keep loading until the last page")
@click.pass_obj
def list_invitations(
    settings: Settings,
    status: str | None,
    date_from: datetime | None,
    date_to: datetime | None,
    per_page: int | None,
    load_all: bool,
) -> None:
    """List incoming contractor invitations."""
    try:
        filters = InvitationFilters(
            status=InvitationStatus(status) if status else None,
            date_from=date_from.date() if date_from else None,
            date_to=date_to.date() if date_to else None,
            per_page=per_page,
        )
    except ValueError as e:
        _fail(str(e))

    async def action(gateway: HttpInvitationGateway) -> InvitationListController:
        controller = InvitationListController(
            gateway, filters=filters, default_per_page=settings.default_per_page
        )
        await controller.refresh()
        while load_all and controller.error is None and controller.has_more:
            if not await controller.load_more():
                break
        return controller

    controller = _run(settings, action)
    if controller.error and not controller.items:
        _fail(controller.error)

    now = _now()
    for invitation in controller.items:
        click.echo(_format_row(invitation, now))
    if controller.pagination is not None:
        click.echo(
            f"Showing {len(controller.items)} of {controller.pagination.total} invitations"
        )
    if controller.error:
        click.echo(f"Warning: {controller.error}", err=True)


@cli.command()
@click.argument("token")
@click.pass_obj
def show(settings: Settings, token: str) -> None:
    """Show the invitation identified by TOKEN."""

    async def action(gateway: HttpInvitationGateway) -> InvitationDetailsController:
        details = InvitationDetailsController(gateway, token)
        await details.load()
        return details

    details = _run(settings, action)
    invitation = details.invitation
    if invitation is None:
        _fail(details.error or "Invitation not found")

    now = _now()
    organization = invitation.from_organization
    verified = " (verified)" if organization.is_verified else ""
    lines = [
        f"Invitation #{invitation.id}",
        f"  Status:       {invitation.status.label}",
        f"  From:         {organization.name}{verified}, {organization.city}",
        f"  Invited by:   {invitation.invited_by.name} <{invitation.invited_by.email}>",
        f"  Created:      {invitation.created_at.isoformat()}",
        f"  Expires:      {invitation.expires_at.isoformat()}",
    ]
    if invitation.is_pending and not invitation.is_expired:
        lines[-1] += f" ({time_until_expiry(invitation.expires_at, now)})"
    if invitation.project_type:
        lines.append(f"  Project type: {invitation.project_type}")
    if invitation.budget_range:
        lines.append(f"  Budget:       {invitation.budget_range}")
    if invitation.decline_reason:
        lines.append(f"  Reason:       {invitation.decline_reason}")
    if invitation.invitation_message:
        lines.append("")
        lines.append(invitation.invitation_message)
    click.echo("\n".join(lines))


@cli.command()
@click.argument("token")
@click.pass_obj
def accept(settings: Settings, token: str) -> None:
    """Accept the invitation identified by TOKEN."""

    actions: InvitationActionController | None = None

    async def action(gateway: HttpInvitationGateway) -> AcceptResult | None:
        nonlocal actions
        actions = InvitationActionController(gateway)
        return await actions.accept(token)

    result = _run(settings, action)
    if result is None:
        _fail(actions.accept_error or "Invitation was not accepted")
    contractor = result.contractor
    click.echo(result.message or "Invitation accepted.")
    click.echo(f"Connected to {contractor.name} (contractor #{contractor.id})")


@cli.command()
@click.argument("token")
@click.option("--reason", type=str, default=None, help="Optional reason for declining")
@click.pass_obj
def decline(settings: Settings, token: str, reason: str | None) -> None:
    """Decline the invitation identified by TOKEN."""

    actions: InvitationActionController | None = None

    async def action(gateway: HttpInvitationGateway) -> bool | None:
        nonlocal actions
        actions = InvitationActionController(gateway)
        return await actions.decline(token, reason)

    if not _run(settings, action):
        _fail(actions.decline_error or "Invitation was not declined")
    click.echo("Invitation declined.")


@cli.command()
@click.pass_obj
def stats(settings: Settings) -> None:
    """Show received and sent invitation statistics."""

    async def action(gateway: HttpInvitationGateway) -> InvitationStatsController:
        controller = InvitationStatsController(gateway)
        await controller.refresh()
        return controller

    controller = _run(settings, action)
    if controller.stats is None:
        _fail(controller.error or "Statistics unavailable")

    snapshot = controller.stats
    click.echo(_format_counters("Received invitations", snapshot.received_invitations))
    click.echo(_format_counters("Sent invitations", snapshot.sent_invitations))
    click.echo(f"Overall success rate: {as_percent(snapshot.overall_success_rate)}%")


@cli.command()
@click.pass_obj
def notifications(settings: Settings) -> None:
    """Show pending invitations that need a response."""

    async def action(gateway: HttpInvitationGateway) -> NotificationAggregator:
        aggregator = NotificationAggregator.for_gateway(
            gateway,
            per_page=settings.notification_per_page,
            expiring_soon_window=timedelta(days=settings.expiring_soon_days),
            badge_cap=settings.badge_cap,
        )
        await aggregator.refresh()
        return aggregator

    aggregator = _run(settings, action)
    if aggregator.list_controller.error:
        _fail(aggregator.list_controller.error)

    active = aggregator.active_notifications()
    if not active:
        click.echo("No new invitations.")
        return

    urgent_ids = {invitation.id for invitation in aggregator.urgent_notifications()}
    click.echo(f"{aggregator.badge_label()} new invitations ({len(urgent_ids)} urgent)")
    now = _now()
    for invitation in active:
        marker = "!" if invitation.id in urgent_ids else " "
        click.echo(f"{marker} {_format_row(invitation, now)}")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `prohelper` command is run
    or when using `python -m prohelper`.
    """
    cli()


if __name__ == "__main__":
    main()
