import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from db.models import Goal
from goals.goal_model import GoalCreate, GoalRead
from goals.goal_service import DEADLINE_PASSED_MESSAGE, GoalService, savings_recommendations
from services.result import ErrorKind


NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(session, goal_repo) -> GoalService:
    return GoalService(session, goal_repo)


def _goal(target: str, current: str, target_date: datetime) -> Goal:
    return Goal(
        id=1,
        user_id=uuid.uuid4(),
        name="Bike",
        target_amount=Decimal(target),
        current_amount=Decimal(current),
        start_date=NOW - timedelta(days=30),
        target_date=target_date,
        is_completed=False,
    )


def test_recommendation_spreads_remaining_over_days_left():
    goal = _goal("1000", "400", NOW + timedelta(days=10))

    assert savings_recommendations(goal, now=NOW) == ["To reach your goal, try to save 60.00 per day."]


def test_recommendation_rounds_to_cents():
    goal = _goal("100", "0", NOW + timedelta(days=3))

    assert savings_recommendations(goal, now=NOW) == ["To reach your goal, try to save 33.33 per day."]


def test_recommendation_when_deadline_passed():
    goal = _goal("1000", "400", NOW - timedelta(days=1))

    assert savings_recommendations(goal, now=NOW) == [DEADLINE_PASSED_MESSAGE]


def test_recommendation_on_deadline_day():
    goal = _goal("1000", "400", NOW + timedelta(hours=6))

    assert savings_recommendations(goal, now=NOW) == [DEADLINE_PASSED_MESSAGE]


def test_progress_percentage():
    read = GoalRead.model_validate(_goal("1000", "250", NOW + timedelta(days=5)))

    assert read.progress_percentage == Decimal("25.00")


def test_progress_percentage_zero_target():
    read = GoalRead.model_validate(_goal("0", "250", NOW + timedelta(days=5)))

    assert read.progress_percentage == Decimal("0")


def test_goal_schema_requires_target_after_start():
    with pytest.raises(ValidationError):
        GoalCreate(name="Trip", target_amount=Decimal("500"), start_date=NOW, target_date=NOW)


@pytest.mark.asyncio
async def test_delete_missing_goal_is_not_found(service: GoalService, user_id):
    result = await service.delete_goal(user_id, 77)

    assert result.error.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_recommendations_for_missing_goal_is_not_found(service: GoalService, user_id):
    result = await service.get_recommendations(user_id, 77)

    assert result.error.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_add_then_get_recommendations(service: GoalService, user_id):
    now = datetime.now(timezone.utc)
    created = await service.add_goal(
        user_id,
        GoalCreate(
            name="Laptop",
            target_amount=Decimal("1500"),
            current_amount=Decimal("300"),
            start_date=now - timedelta(days=1),
            target_date=now + timedelta(days=12, hours=1),
        ),
    )

    result = await service.get_recommendations(user_id, created.value.id)

    assert created.value.progress_percentage == Decimal("20.00")
    assert result.value.recommendations == ["To reach your goal, try to save 100.00 per day."]
