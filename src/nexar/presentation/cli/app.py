"""Nexar CLI application using Typer.

Thin command-line surface over ``MarketplaceClient``: account management,
listing management, moderation and a connection check against the
configured hosted service.
"""

import asyncio
import logging
import mimetypes
import sys
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar
from uuid import UUID

import pydantic
import typer
from rich.console import Console
from rich.table import Table

from nexar.application.dtos import ActionReport, OperationResult
from nexar.domain.listing import (
    ImageUpload,
    Listing,
    ListingDraft,
    ListingFilters,
    ListingPatch,
    ListingStatus,
)
from nexar.domain.profile import ProfileHints, SellerType
from nexar.domain.shared.exceptions import DomainException
from nexar.infrastructure.factory import MarketplaceClient, build_client
from nexar_config.settings import get_settings

T = TypeVar("T")

app = typer.Typer(
    name="nexar",
    help="Nexar marketplace client CLI",
    no_args_is_help=True,
)
console = Console()

auth_app = typer.Typer(name="auth", help="Account and session commands", no_args_is_help=True)
listings_app = typer.Typer(name="listings", help="Listing commands", no_args_is_help=True)
admin_app = typer.Typer(name="admin", help="Moderation commands", no_args_is_help=True)
system_app = typer.Typer(name="system", help="Service diagnostics", no_args_is_help=True)
app.add_typer(auth_app)
app.add_typer(listings_app)
app.add_typer(admin_app)
app.add_typer(system_app)


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure client logging once per process."""
    log_level = getattr(logging, get_settings().log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("nexar").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(operation: Callable[[MarketplaceClient], Awaitable[T]]) -> T:
    """Run ``operation`` against a fresh client and turn errors into exit codes."""
    try:
        _configure_logging()
    except pydantic.ValidationError as e:
        console.print("[red]Configuration error:[/red] set REMOTE_URL and REMOTE_ANON_KEY")
        raise typer.Exit(code=2) from e

    async def runner() -> T:
        async with build_client() as client:
            return await operation(client)

    try:
        return asyncio.run(runner())
    except DomainException as e:
        console.print(f"[red]Error:[/red] {e.message} [dim]({e.code.value})[/dim]")
        raise typer.Exit(code=1) from e


def _unwrap(result: OperationResult[T]) -> T | None:
    if result.error is not None:
        console.print(
            f"[red]Error:[/red] {result.error.message} [dim]({result.error.code.value})[/dim]"
        )
        raise typer.Exit(code=1)
    return result.data


def _print_report(report: ActionReport) -> None:
    if report.success:
        console.print(f"[green]✓[/green] {report.message}")
        return
    console.print(f"[red]✗[/red] {report.error}")
    raise typer.Exit(code=1)


def _decimal(value: Optional[float]) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _read_images(paths: Optional[list[Path]]) -> list[ImageUpload]:
    uploads = []
    for path in paths or []:
        content_type, _ = mimetypes.guess_type(path.name)
        uploads.append(
            ImageUpload(filename=path.name, content=path.read_bytes(), content_type=content_type)
        )
    return uploads


def _listing_table(listings: list[Listing], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Price", justify="right")
    table.add_column("Year", justify="right")
    table.add_column("Location")
    table.add_column("Seller")
    table.add_column("Status")
    for listing in listings:
        table.add_row(
            str(listing.id),
            listing.title,
            f"{listing.price:,}",
            str(listing.year),
            listing.location,
            listing.seller_name,
            listing.status.value,
        )
    return table


# ---------------------------------------------------------------------------
# auth
# ---------------------------------------------------------------------------


@auth_app.command("sign-up")
def sign_up(
    email: str = typer.Argument(..., help="Account email"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
    name: Optional[str] = typer.Option(None, help="Display name"),
    phone: Optional[str] = typer.Option(None),
    location: Optional[str] = typer.Option(None),
    seller_type: Optional[SellerType] = typer.Option(None, case_sensitive=False),
) -> None:
    """Create an account and its profile."""
    hints = ProfileHints(name=name, phone=phone, location=location, seller_type=seller_type)
    outcome = _unwrap(_run(lambda c: c.synchronizer.sign_up(email, password, hints)))
    if outcome is None:
        return

    console.print(f"[green]Account created:[/green] {email}")
    if outcome.session is None:
        console.print("[yellow]Confirm your email address before signing in.[/yellow]")
    if not outcome.profile_synced:
        console.print(
            "[yellow]Profile creation was deferred; it will be completed at sign-in "
            "or with 'nexar auth repair'.[/yellow]"
        )


@auth_app.command("sign-in")
def sign_in(
    email: str = typer.Argument(...),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Sign in and cache the current user locally."""
    outcome = _unwrap(_run(lambda c: c.synchronizer.sign_in(email, password)))
    if outcome is None:
        return
    entry = outcome.session_entry
    console.print(f"[green]Signed in as[/green] {entry.name} <{entry.email}>")
    if outcome.degraded:
        console.print("[yellow]Profile unavailable; showing account defaults.[/yellow]")


@auth_app.command("sign-out")
def sign_out() -> None:
    """Sign out and clear all local state."""
    result = _run(lambda c: c.synchronizer.sign_out())
    if result.ok:
        console.print("[green]Signed out[/green]")
    else:
        console.print(f"[yellow]Signed out locally; remote sign-out failed: {result.error}[/yellow]")


@auth_app.command("whoami")
def whoami() -> None:
    """Show the cached user and verify it against the service."""

    async def operation(client: MarketplaceClient) -> tuple[Any, Any, bool]:
        identity = await client.synchronizer.current_identity()
        is_admin = await client.privileges.is_admin(identity)
        return client.session_store.get(), identity, is_admin

    entry, identity, is_admin = _run(operation)
    if identity is None:
        console.print("[dim]Not signed in[/dim]")
        return

    table = Table(show_header=False)
    table.add_row("Identity", str(identity.id))
    table.add_row("Email", identity.email or "-")
    if entry is not None:
        table.add_row("Name", entry.name)
        table.add_row("Seller type", entry.seller_type.value)
    table.add_row("Admin", "yes" if is_admin else "no")
    console.print(table)


@auth_app.command("repair")
def repair() -> None:
    """Create a missing profile and refresh the cached user."""
    _print_report(_run(lambda c: c.synchronizer.repair()))


@auth_app.command("reset-password")
def reset_password(email: str = typer.Argument(...)) -> None:
    """Send a password reset email."""
    _unwrap(_run(lambda c: c.synchronizer.reset_password(email)))
    console.print(f"[green]Password reset email sent to[/green] {email}")


@auth_app.command("update-password")
def update_password(
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
) -> None:
    """Change the signed-in user's password."""
    _unwrap(_run(lambda c: c.synchronizer.update_password(password)))
    console.print("[green]Password updated[/green]")


# ---------------------------------------------------------------------------
# listings
# ---------------------------------------------------------------------------


@listings_app.command("browse")
def browse(  # NOQA: PLR0913
    category: Optional[str] = typer.Option(None),
    brand: Optional[str] = typer.Option(None),
    price_min: Optional[float] = typer.Option(None),
    price_max: Optional[float] = typer.Option(None),
    year_min: Optional[int] = typer.Option(None),
    year_max: Optional[int] = typer.Option(None),
    location: Optional[str] = typer.Option(None),
    seller_type: Optional[SellerType] = typer.Option(None, case_sensitive=False),
    fuel_type: Optional[str] = typer.Option(None),
    transmission: Optional[str] = typer.Option(None),
    mileage_max: Optional[int] = typer.Option(None),
) -> None:
    """List active listings, newest first."""
    filters = ListingFilters(
        category=category,
        brand=brand,
        price_min=_decimal(price_min),
        price_max=_decimal(price_max),
        year_min=year_min,
        year_max=year_max,
        location=location,
        seller_type=seller_type,
        fuel_type=fuel_type,
        transmission=transmission,
        mileage_max=mileage_max,
    )
    listings = _run(lambda c: c.browse_listings_query().execute(filters))
    console.print(_listing_table(listings, f"Listings ({len(listings)})"))


@listings_app.command("show")
def show(listing_id: UUID = typer.Argument(...)) -> None:
    """Show a single listing."""
    listing = _run(lambda c: c.get_listing_query().execute(listing_id))

    table = Table(show_header=False, title=listing.title)
    for label, value in [
        ("Price", f"{listing.price:,}"),
        ("Brand / model", f"{listing.brand} {listing.model}"),
        ("Year", str(listing.year)),
        ("Mileage", f"{listing.mileage:,} km"),
        ("Location", listing.location),
        ("Seller", f"{listing.seller_name} ({listing.seller_type.value})"),
        ("Status", listing.status.value),
        ("Views", str(listing.views_count)),
        ("Images", "\n".join(listing.images) or "-"),
    ]:
        table.add_row(label, value)
    console.print(table)
    if listing.description:
        console.print(listing.description)


@listings_app.command("create")
def create(  # NOQA: PLR0913
    title: str = typer.Option(...),
    price: float = typer.Option(...),
    year: int = typer.Option(...),
    mileage: int = typer.Option(...),
    location: str = typer.Option(...),
    category: str = typer.Option(...),
    brand: str = typer.Option(...),
    model: str = typer.Option(...),
    engine_capacity: Optional[int] = typer.Option(None),
    fuel_type: Optional[str] = typer.Option(None),
    transmission: Optional[str] = typer.Option(None),
    condition: Optional[str] = typer.Option(None),
    description: str = typer.Option(""),
    image: Optional[list[Path]] = typer.Option(None, exists=True, dir_okay=False),
) -> None:
    """Create a listing as the signed-in user."""
    try:
        draft = ListingDraft(
            title=title,
            price=Decimal(str(price)),
            year=year,
            mileage=mileage,
            location=location,
            category=category,
            brand=brand,
            model=model,
            engine_capacity=engine_capacity,
            fuel_type=fuel_type,
            transmission=transmission,
            condition=condition,
            description=description,
        )
    except DomainException as e:
        console.print(f"[red]Invalid listing:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    uploads = _read_images(image)
    listing = _unwrap(_run(lambda c: c.listings.create(draft, uploads)))
    if listing is None:
        return
    console.print(f"[green]Listing created:[/green] {listing.id}")
    if len(listing.images) < len(uploads):
        console.print(
            f"[yellow]{len(uploads) - len(listing.images)} image(s) could not be uploaded[/yellow]"
        )


@listings_app.command("update")
def update(  # NOQA: PLR0913
    listing_id: UUID = typer.Argument(...),
    title: Optional[str] = typer.Option(None),
    price: Optional[float] = typer.Option(None),
    mileage: Optional[int] = typer.Option(None),
    location: Optional[str] = typer.Option(None),
    description: Optional[str] = typer.Option(None),
    status: Optional[ListingStatus] = typer.Option(None, case_sensitive=False),
    image: Optional[list[Path]] = typer.Option(None, exists=True, dir_okay=False),
) -> None:
    """Update fields of a listing and append new images."""
    changes = {
        key: value
        for key, value in {
            "title": title,
            "price": price,
            "mileage": mileage,
            "location": location,
            "description": description,
            "status": status,
        }.items()
        if value is not None
    }
    patch = ListingPatch(values=changes)
    uploads = _read_images(image)
    listing = _unwrap(_run(lambda c: c.listings.update(listing_id, patch, uploads)))
    if listing is not None:
        console.print(f"[green]Listing updated:[/green] {listing.id}")


@listings_app.command("delete")
def delete(
    listing_id: UUID = typer.Argument(...),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a listing and its images."""
    if not yes:
        typer.confirm(f"Delete listing {listing_id}?", abort=True)
    deleted = _unwrap(_run(lambda c: c.listings.delete(listing_id)))
    if deleted:
        console.print(f"[green]Listing deleted:[/green] {listing_id}")
    else:
        console.print(f"[dim]Listing {listing_id} did not exist[/dim]")


# ---------------------------------------------------------------------------
# admin
# ---------------------------------------------------------------------------


@admin_app.command("check")
def admin_check() -> None:
    """Tell whether the signed-in user is an administrator."""
    is_admin = _run(lambda c: c.privileges.is_current_user_admin())
    console.print("[green]Administrator[/green]" if is_admin else "[dim]Not an administrator[/dim]")


@admin_app.command("listings")
def admin_listings(
    status: Optional[ListingStatus] = typer.Option(None, case_sensitive=False),
    search: Optional[str] = typer.Option(None),
) -> None:
    """List every listing regardless of status."""
    items = _run(lambda c: c.list_all_listings_query().execute(status=status, search=search))

    table = Table(title=f"All listings ({len(items)})")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Seller")
    table.add_column("Email")
    table.add_column("Verified")
    table.add_column("Status")
    for item in items:
        seller = item.seller
        table.add_row(
            str(item.listing.id),
            item.listing.title,
            seller.name if seller else item.listing.seller_name,
            (seller.email if seller else None) or "-",
            "yes" if seller and seller.verified else "no",
            item.listing.status.value,
        )
    console.print(table)


@admin_app.command("users")
def admin_users(search: Optional[str] = typer.Option(None)) -> None:
    """List every user profile."""
    profiles = _run(lambda c: c.list_all_users_query().execute(search=search))

    table = Table(title=f"Users ({len(profiles)})")
    table.add_column("User ID", style="dim")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Type")
    table.add_column("Admin")
    table.add_column("Suspended")
    for profile in profiles:
        table.add_row(
            str(profile.user_id),
            profile.name,
            profile.email or "-",
            profile.seller_type.value,
            "yes" if profile.is_admin else "",
            "yes" if profile.suspended else "",
        )
    console.print(table)


@admin_app.command("set-status")
def admin_set_status(
    listing_id: UUID = typer.Argument(...),
    status: ListingStatus = typer.Argument(..., case_sensitive=False),
) -> None:
    """Approve, reject or otherwise change a listing's status."""
    listing = _run(lambda c: c.update_listing_status_command().execute(listing_id, status))
    console.print(f"[green]Listing {listing.id} is now {listing.status.value}[/green]")


@admin_app.command("delete")
def admin_delete(
    listing_id: UUID = typer.Argument(...),
    yes: bool = typer.Option(False, "--yes", "-y"),
) -> None:
    """Delete any listing."""
    if not yes:
        typer.confirm(f"Delete listing {listing_id}?", abort=True)
    _run(lambda c: c.delete_listing_command().execute(listing_id))
    console.print(f"[green]Listing deleted:[/green] {listing_id}")


@admin_app.command("suspend")
def admin_suspend(
    user_id: UUID = typer.Argument(...),
    reactivate: bool = typer.Option(False, "--reactivate", help="Lift the suspension"),
) -> None:
    """Suspend (or reactivate) a user."""
    profile = _run(lambda c: c.set_user_suspension_command().execute(user_id, not reactivate))
    state = "suspended" if profile.suspended else "active"
    console.print(f"[green]{profile.name} is now {state}[/green]")


@admin_app.command("overview")
def admin_overview() -> None:
    """Show listing and user totals."""
    overview = _run(lambda c: c.admin_overview_query().execute())

    table = Table(show_header=False, title="Overview")
    for status, count in overview.listings_by_status.items():
        table.add_row(f"Listings ({status.value})", str(count))
    table.add_row("Listings (total)", str(overview.total_listings))
    table.add_row("New listings (7 days)", str(overview.new_listings))
    table.add_row("Users", str(overview.total_users))
    table.add_row("Dealers", str(overview.dealers))
    table.add_row("Suspended users", str(overview.suspended_users))
    console.print(table)


# ---------------------------------------------------------------------------
# system
# ---------------------------------------------------------------------------


@system_app.command("check")
def system_check() -> None:
    """Check collections and storage buckets of the hosted service."""
    _print_report(_run(lambda c: c.connection_check_query().execute()))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
