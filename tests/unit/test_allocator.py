"""Journey plan numbering: counter parsing, reseeding and conflict retries."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from journey_planner.models import NEXT_JOURNEY_PLAN_NUMBER_KEY, JourneyPlan
from journey_planner.services.journey_plans import (
    JourneyPlanService,
    JourneyPlanTable,
    SettingsStore,
    parse_next_value,
    parse_positive_int,
)
from journey_planner.services.journey_plans.exceptions import InvalidNextNumber, JourneyPlanNumberConflict
from journey_planner.utils.retry import ConflictRetryConfig


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, 5),
        ({"next": 5}, 5),
        ({"value": 5}, 5),
        ({"next": "oops", "value": 9}, 9),
        (7.0, 7),
        ({"foo": 1}, None),
        ("abc", None),
        ("5", None),
        (0, None),
        (-1, None),
        (True, None),
        (5.5, None),
        (None, None),
        (2**31 - 1, 2**31 - 1),
        ({"next": 2**31}, None),
    ],
)
def test_parse_next_value(value, expected):
    assert parse_next_value(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(" 42 ", 42), ("42", 42), (42, 42), ("4.2", None), ("", None), (False, None), (None, None)],
)
def test_parse_positive_int_accepts_numeric_strings(value, expected):
    assert parse_positive_int(value) == expected


async def test_reseed_uses_highest_stored_number(
    journey_plans: JourneyPlanService, db_session: AsyncSession, store_plans
):
    await store_plans(3, 7, 2)

    assert await journey_plans.allocator.reseed() == 8
    assert await SettingsStore(db_session).get(NEXT_JOURNEY_PLAN_NUMBER_KEY) == {"next": 8}


async def test_reseed_on_empty_table_starts_at_one(journey_plans: JourneyPlanService):
    assert await journey_plans.allocator.reseed() == 1


async def test_get_next_number_prefers_cached_value(journey_plans: JourneyPlanService, store_plans):
    await store_plans(3)
    await journey_plans.set_next_number(40)

    # Cache ahead of the table is fine and must not be pulled back
    assert await journey_plans.peek_next_number() == 40
    assert await journey_plans.peek_next_number() == 40


async def test_get_next_number_reseeds_unusable_cache(
    journey_plans: JourneyPlanService, db_session: AsyncSession, store_plans
):
    await store_plans(1, 2)
    await SettingsStore(db_session).put(NEXT_JOURNEY_PLAN_NUMBER_KEY, {"next": "three"})

    assert await journey_plans.peek_next_number() == 3
    assert await SettingsStore(db_session).get(NEXT_JOURNEY_PLAN_NUMBER_KEY) == {"next": 3}


async def test_get_next_number_reseeds_counter_beyond_column_range(
    journey_plans: JourneyPlanService, db_session: AsyncSession, store_plans
):
    await store_plans(4)
    await SettingsStore(db_session).put(NEXT_JOURNEY_PLAN_NUMBER_KEY, {"next": 3_000_000_000})

    assert await journey_plans.peek_next_number() == 5


async def test_ensure_at_least_only_moves_forward(journey_plans: JourneyPlanService):
    allocator = journey_plans.allocator
    await allocator.set_next_number(5)

    assert await allocator.ensure_at_least(10) == 11
    assert await allocator.ensure_at_least(3) == 11
    assert await allocator.cached_next() == 11


@pytest.mark.parametrize("value", [0, -3, "abc", None, True, 2.5, {"next": 4}, 2**31])
async def test_set_next_number_rejects_invalid_values(journey_plans: JourneyPlanService, value):
    with pytest.raises(InvalidNextNumber):
        await journey_plans.set_next_number(value)


async def test_create_plan_numbers_are_sequential(journey_plans: JourneyPlanService):
    numbers = []
    for _ in range(4):
        plan = await journey_plans.create_plan({"driver_name": "Salim"})
        numbers.append(plan.journey_plan_number)

    assert numbers == [1, 2, 3, 4]
    assert await journey_plans.allocator.cached_next() == 5


async def test_create_plan_ignores_client_number(journey_plans: JourneyPlanService):
    plan = await journey_plans.create_plan({"journey_plan_number": 999, "driver_name": "Salim"})

    assert plan.journey_plan_number == 1


async def test_create_plan_recovers_from_stale_cache(journey_plans: JourneyPlanService, store_plans):
    await store_plans(5)
    await journey_plans.set_next_number(5)

    plan = await journey_plans.create_plan({"driver_name": "Salim"})

    assert plan.journey_plan_number == 6
    assert await journey_plans.allocator.cached_next() == 7


async def test_create_plan_skips_past_cache_lagging_behind_table(journey_plans: JourneyPlanService, store_plans):
    await store_plans(*range(1, 11))
    await journey_plans.set_next_number(3)

    plan = await journey_plans.create_plan({})

    assert plan.journey_plan_number == 11


async def test_renumbered_plan_raises_counter(journey_plans: JourneyPlanService):
    plan = await journey_plans.create_plan({"driver_name": "Salim"})
    for _ in range(3):
        await journey_plans.create_plan({})

    await journey_plans.update_plan(plan.journey_plan_number, {"journey_plan_number": 50})
    created = await journey_plans.create_plan({})

    assert created.journey_plan_number == 51


async def test_delete_does_not_reuse_numbers(journey_plans: JourneyPlanService):
    await journey_plans.create_plan({})
    second = await journey_plans.create_plan({})

    await journey_plans.delete_plan(second.journey_plan_number)
    created = await journey_plans.create_plan({})

    assert created.journey_plan_number == 3


async def test_import_plan_keeps_number_and_raises_counter(journey_plans: JourneyPlanService):
    await journey_plans.create_plan({})

    imported = await journey_plans.import_plan({"journey_plan_number": "120", "driver_name": "Legacy"})
    created = await journey_plans.create_plan({})

    assert imported.journey_plan_number == 120
    assert created.journey_plan_number == 121


class AlwaysConflictingTable(JourneyPlanTable):
    """Table whose inserts always lose the race for the number"""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.attempts = 0

    async def insert(self, plan: JourneyPlan) -> JourneyPlan:
        self.attempts += 1
        raise JourneyPlanNumberConflict(plan.journey_plan_number)


async def test_create_plan_gives_up_after_max_attempts(db_session: AsyncSession):
    service = JourneyPlanService(db_session, ConflictRetryConfig(max_attempts=3, max_wait=0))
    table = AlwaysConflictingTable(db_session)
    service.table = table
    service.allocator.table = table

    with pytest.raises(JourneyPlanNumberConflict):
        await service.create_plan({"driver_name": "Salim"})

    assert table.attempts == 3
