"""Reference data for the journey plan form (drivers, vehicles, locations, rest types)."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from journey_planner.models.options import Driver, Location, RestType, Vehicle
from journey_planner.services.exceptions import ConflictError, StorageUnavailable, ValidationError, storage_errors

logger = structlog.get_logger(__name__)


class OptionKind(StrEnum):
    DRIVERS = "drivers"
    VEHICLES = "vehicles"
    LOCATIONS = "locations"
    REST_TYPES = "rest-types"


@dataclass(frozen=True)
class OptionSpec:
    model: type[SQLModel]
    label_field: str  # unique, required, sort key
    display_name: str  # "Driver" -> "Driver name is required"


OPTION_SPECS: dict[OptionKind, OptionSpec] = {
    OptionKind.DRIVERS: OptionSpec(Driver, "name", "Driver"),
    OptionKind.VEHICLES: OptionSpec(Vehicle, "number", "Vehicle"),
    OptionKind.LOCATIONS: OptionSpec(Location, "name", "Location"),
    OptionKind.REST_TYPES: OptionSpec(RestType, "name", "Rest type"),
}


class OptionLabelRequired(ValidationError):
    """Option was submitted without its name/number."""

    pass


class OptionAlreadyExists(ConflictError):
    """An option with the same name/number exists."""

    pass


class OptionsService:
    """Service for listing and adding reference data options."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_options(self, kind: OptionKind) -> Sequence[Any]:
        spec = OPTION_SPECS[kind]
        statement = select(spec.model).order_by(getattr(spec.model, spec.label_field).asc())
        with storage_errors(f"{kind} read"):
            result = await self.session.execute(statement)
            return result.scalars().all()

    async def add_option(self, kind: OptionKind, label: object, **extra: Any) -> Any:
        """Add an option; the label is trimmed and must be unique."""
        spec = OPTION_SPECS[kind]
        trimmed = label.strip() if isinstance(label, str) else ""
        if not trimmed:
            raise OptionLabelRequired(f"{spec.display_name} {spec.label_field} is required")

        option = spec.model(**{spec.label_field: trimmed, **extra})
        self.session.add(option)
        try:
            with storage_errors(f"{kind} write"):
                await self.session.commit()
                await self.session.refresh(option)
        except IntegrityError as e:
            await self.session.rollback()
            raise OptionAlreadyExists(f"{spec.display_name} already exists") from e
        except StorageUnavailable:
            await self.session.rollback()
            raise

        logger.info("Added option", kind=kind, label=trimmed)
        return option
