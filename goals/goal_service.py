from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Goal
from db.postgres import get_async_session
from goals.goal_model import GoalCreate, GoalRead, GoalRecommendations, GoalUpdate
from repositories.goal_repo_pg import GoalRepositoryPg
from schemas.common import as_utc
from services.result import Result

logger = logging.getLogger(__name__)

DEADLINE_PASSED_MESSAGE = "Your goal deadline has passed. Consider setting a new target date."


def savings_recommendations(goal: Goal, now: Optional[datetime] = None) -> List[str]:
    now = now or datetime.now(timezone.utc)
    days_left = (as_utc(goal.target_date) - now).days
    if days_left <= 0:
        return [DEADLINE_PASSED_MESSAGE]
    remaining = goal.target_amount - goal.current_amount
    return [f"To reach your goal, try to save {remaining / days_left:.2f} per day."]


class GoalService:
    def __init__(self, session: AsyncSession, goals: GoalRepositoryPg) -> None:
        self._session = session
        self._goals = goals

    async def list_goals(self, user_id: uuid.UUID) -> List[GoalRead]:
        return [GoalRead.model_validate(g) for g in await self._goals.list_for_user(user_id)]

    async def _owned(self, user_id: uuid.UUID, goal_id: int) -> Optional[Goal]:
        goal = await self._goals.get_by_id(goal_id)
        if goal is None or goal.user_id != user_id:
            logger.warning("Goal not found or unauthorized: ID %s, User %s", goal_id, user_id)
            return None
        return goal

    async def get_goal(self, user_id: uuid.UUID, goal_id: int) -> Result[GoalRead]:
        goal = await self._owned(user_id, goal_id)
        if goal is None:
            return Result.not_found("Goal not found")
        return Result.success(GoalRead.model_validate(goal))

    async def add_goal(self, user_id: uuid.UUID, payload: GoalCreate) -> Result[GoalRead]:
        goal = Goal(user_id=user_id, **payload.model_dump())
        await self._goals.add(goal)
        await self._session.commit()
        logger.info("Goal %s added for user %s", goal.id, user_id)
        return Result.success(GoalRead.model_validate(goal))

    async def update_goal(self, user_id: uuid.UUID, goal_id: int, payload: GoalUpdate) -> Result[GoalRead]:
        goal = await self._owned(user_id, goal_id)
        if goal is None:
            return Result.not_found("Goal not found")
        for field, value in payload.model_dump().items():
            setattr(goal, field, value)
        await self._session.commit()
        logger.info("Goal updated: ID %s, User %s", goal_id, user_id)
        return Result.success(GoalRead.model_validate(goal))

    async def delete_goal(self, user_id: uuid.UUID, goal_id: int) -> Result[None]:
        goal = await self._owned(user_id, goal_id)
        if goal is None:
            return Result.not_found("Goal not found")
        await self._goals.delete(goal)
        await self._session.commit()
        logger.info("Goal deleted: ID %s, User %s", goal_id, user_id)
        return Result.success()

    async def get_recommendations(self, user_id: uuid.UUID, goal_id: int) -> Result[GoalRecommendations]:
        goal = await self._owned(user_id, goal_id)
        if goal is None:
            return Result.not_found("Goal not found")
        return Result.success(GoalRecommendations(goal_id=goal.id, recommendations=savings_recommendations(goal)))


def get_goal_service(session: AsyncSession = Depends(get_async_session)) -> GoalService:
    return GoalService(session, GoalRepositoryPg(session))
