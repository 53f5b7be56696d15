"""Administrative command line for the journey planner backend.

Usage:
    python -m journey_planner create-user admin --role admin --password secret123
    python -m journey_planner reseed-numbering
    python -m journey_planner set-next-number 500
    python -m journey_planner import-plans legacy_plans.json
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import click
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from journey_planner.db import async_session_maker, dispose_engine
from journey_planner.logging import setup_logging
from journey_planner.models.user import UserRole
from journey_planner.services.auth.user_service import UserService
from journey_planner.services.exceptions import ServiceError
from journey_planner.services.journey_plans import JourneyPlanService

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _run(operation: Callable[[AsyncSession], Awaitable[T]]) -> T:
    """Run an async operation inside its own session and dispose the engine afterwards."""

    async def runner() -> T:
        try:
            async with async_session_maker() as session:
                return await operation(session)
        finally:
            await dispose_engine()

    try:
        return asyncio.run(runner())
    except ServiceError as e:
        raise click.ClickException(str(e)) from e


@click.group()
def cli() -> None:
    """Journey planner administration."""
    setup_logging()


@cli.command("create-user")
@click.argument("username")
@click.option("--password", default=None, help="Initial password. Defaults to the configured default password.")
@click.option("--role", type=click.Choice([r.value for r in UserRole]), default=UserRole.USER.value, show_default=True)
@click.option("--full-name", default=None, help="Display name.")
def create_user(username: str, password: str | None, role: str, full_name: str | None) -> None:
    """Create a user account."""
    user = _run(lambda session: UserService(session).create_user(username, full_name, role, password))
    click.echo(f"Created {user.role} {user.username} (id={user.id})")
    if user.must_change_password:
        click.echo("The user must change the default password on first login.")


@cli.command("reseed-numbering")
def reseed_numbering() -> None:
    """Recompute the next journey plan number from the stored plans."""
    next_number = _run(lambda session: JourneyPlanService(session).allocator.reseed())
    click.echo(f"Next journey plan number: {next_number}")


@cli.command("set-next-number")
@click.argument("next_number", type=int)
def set_next_number(next_number: int) -> None:
    """Override the next journey plan number."""
    value = _run(lambda session: JourneyPlanService(session).set_next_number(next_number))
    click.echo(f"Next journey plan number: {value}")


@cli.command("import-plans")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_plans(path: Path) -> None:
    """Import numbered journey plans from a JSON array.

    Each plan keeps its journey_plan_number; the counter is raised past the
    highest imported number.
    """
    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}") from e
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise click.ClickException(f"{path} must contain a JSON array of objects")

    async def run_import(session: AsyncSession) -> int:
        service = JourneyPlanService(session)
        for record in records:
            plan = await service.import_plan(record)
            logger.info("Imported journey plan", number=plan.journey_plan_number)
        return await service.peek_next_number()

    next_number = _run(run_import)
    click.echo(f"Imported {len(records)} journey plans, next number is {next_number}")
