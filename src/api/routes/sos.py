"""
Dispatch endpoints
==================

POST /api/v1/sos        -- one-tap SOS; assigns the nearest hospital or responder
POST /api/v1/emergency  -- same dispatch, with a caller-supplied description

Status codes
------------
* 201 -- a hospital or responder was assigned
* 200 -- nobody reachable (``success`` is false, not a failure)
* 401 -- requester unknown
* 409 -- this requester already has an SOS in flight
* 503 -- candidate lookup or request write failed; safe to retry
"""

from __future__ import annotations

import logging
from typing import Optional

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, get_requester_id
from src.api.middleware import limiter
from src.api.schemas import EmergencyCreateRequest, SOSCreateRequest, SOSResult
from src.config import settings
from src.domain.assignment import AssignmentEngine, failure_result, to_sos_result
from src.domain.entities import Coordinate
from src.domain.errors import DispatchError, NotAuthenticated
from src.infrastructure.locks import LockNotAcquired, sos_lock
from src.infrastructure.redis_client import get_redis
from src.infrastructure.repositories import SqlProviderRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dispatch"])

_DISPATCH_RESPONSES = {
    200: {"description": "No hospital or responder available."},
    201: {"description": "Provider assigned."},
    401: {"model": SOSResult, "description": "Requester not authenticated."},
    409: {"model": SOSResult, "description": "SOS already in progress."},
    503: {"model": SOSResult, "description": "Dispatch failed; retry."},
}


@router.post(
    "/sos",
    status_code=201,
    response_model=SOSResult,
    response_model_exclude_none=True,
    summary="Send an SOS",
    responses=_DISPATCH_RESPONSES,
)
@limiter.limit(settings.rate_limit)
async def send_sos(
    request: Request,
    response: Response,
    body: SOSCreateRequest,
    user_id: Optional[str] = Depends(get_requester_id),
    db: AsyncSession = Depends(get_db),
    redis: aioredis.Redis = Depends(get_redis),
):
    return await _dispatch(body, None, user_id, db, redis, response)


@router.post(
    "/emergency",
    status_code=201,
    response_model=SOSResult,
    response_model_exclude_none=True,
    summary="Send an emergency request with a description",
    responses=_DISPATCH_RESPONSES,
)
@limiter.limit(settings.rate_limit)
async def send_emergency_request(
    request: Request,
    response: Response,
    body: EmergencyCreateRequest,
    user_id: Optional[str] = Depends(get_requester_id),
    db: AsyncSession = Depends(get_db),
    redis: aioredis.Redis = Depends(get_redis),
):
    return await _dispatch(body, body.description, user_id, db, redis, response)


async def _dispatch(
    body: SOSCreateRequest,
    description: Optional[str],
    user_id: Optional[str],
    db: AsyncSession,
    redis: aioredis.Redis,
    response: Response,
) -> SOSResult:
    # Anonymous calls are rejected before a lock is taken.
    if not user_id:
        response.status_code = 401
        return SOSResult(**failure_result(NotAuthenticated()))

    engine = AssignmentEngine(SqlProviderRepository(db, user_id))
    try:
        async with sos_lock(redis, user_id, settings.sos_lock_ttl_seconds):
            decision = await engine.dispatch(
                Coordinate(body.latitude, body.longitude),
                body.emergency_type,
                description,
            )
    except LockNotAcquired:
        response.status_code = 409
        return SOSResult(success=False, error="An SOS request is already in progress")
    except NotAuthenticated as exc:
        response.status_code = 401
        return SOSResult(**failure_result(exc))
    except DispatchError as exc:
        logger.warning("Dispatch failed for user %s: %s", user_id, exc)
        await db.rollback()
        response.status_code = 503
        return SOSResult(**failure_result(exc))

    response.status_code = 201 if decision.assigned else 200
    return SOSResult(**to_sos_result(decision))
