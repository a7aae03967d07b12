from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Response, status

from auth.auth import get_current_user
from goals.goal_model import GoalCreate, GoalRead, GoalRecommendations, GoalUpdate
from goals.goal_service import GoalService, get_goal_service
from settings.errors import unwrap


router = APIRouter(prefix="/api/goal", tags=["goal"])


@router.get("", response_model=List[GoalRead])
async def list_goals(
    user_id: uuid.UUID = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service),
) -> List[GoalRead]:
    return await service.list_goals(user_id)


@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
async def add_goal(
    payload: GoalCreate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service),
) -> GoalRead:
    return unwrap(await service.add_goal(user_id, payload))


@router.get("/{goal_id}", response_model=GoalRead)
async def get_goal(
    goal_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service),
) -> GoalRead:
    return unwrap(await service.get_goal(user_id, goal_id))


@router.get("/{goal_id}/recommendations", response_model=GoalRecommendations)
async def get_recommendations(
    goal_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service),
) -> GoalRecommendations:
    return unwrap(await service.get_recommendations(user_id, goal_id))


@router.put("/{goal_id}", response_model=GoalRead)
async def update_goal(
    goal_id: int,
    payload: GoalUpdate,
    user_id: uuid.UUID = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service),
) -> GoalRead:
    return unwrap(await service.update_goal(user_id, goal_id, payload))


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(
    goal_id: int,
    user_id: uuid.UUID = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service),
) -> Response:
    unwrap(await service.delete_goal(user_id, goal_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
