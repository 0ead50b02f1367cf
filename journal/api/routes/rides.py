"""
Ride endpoints (nested under a driver)
======================================

POST   /api/drivers/{pseudonym}/rides                -- record a ride with its stops
GET    /api/drivers/{pseudonym}/rides                -- list, oldest departure first
GET    /api/drivers/{pseudonym}/rides/{identifier}   -- get one
PUT    /api/drivers/{pseudonym}/rides/{identifier}   -- replace stops, traffic and comment
DELETE /api/drivers/{pseudonym}/rides/{identifier}   -- delete the ride and its stops
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from journal.api.dependencies import get_db
from journal.api.middleware import RATE_LIMIT, limiter
from journal.api.schemas import RideRequest, RideResponse
from journal.domain.exceptions import InvalidDataError, NotFoundError
from journal.infrastructure.repositories import DriverRepository, RideRepository

router = APIRouter(prefix="/drivers/{pseudonym}/rides", tags=["rides"])


@router.post(
    "",
    status_code=201,
    response_class=Response,
    summary="Record a ride",
    responses={422: {"description": "Arrival is not after departure"}},
)
@limiter.limit(RATE_LIMIT)
async def create_ride(
    request: Request,
    pseudonym: str,
    body: RideRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        await RideRepository(db).create_ride_for(driver, body.to_entity())
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except InvalidDataError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return Response(status_code=201)


@router.get("", response_model=list[RideResponse], summary="List a driver's rides")
@limiter.limit(RATE_LIMIT)
async def list_rides(
    request: Request,
    pseudonym: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        return await RideRepository(db).find_all_rides_for(driver)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.get(
    "/{identifier}",
    response_model=RideResponse,
    summary="Get one of a driver's rides",
)
@limiter.limit(RATE_LIMIT)
async def get_ride(
    request: Request,
    pseudonym: str,
    identifier: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        return await RideRepository(db).find_ride_for(driver, identifier)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.put(
    "/{identifier}",
    status_code=204,
    response_class=Response,
    summary="Replace one of a driver's rides",
    description=(
        "Full replacement. Sending an arrival marks the ride as done; "
        "omitting it removes a previously recorded arrival."
    ),
)
@limiter.limit(RATE_LIMIT)
async def update_ride(
    request: Request,
    pseudonym: str,
    identifier: str,
    body: RideRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        await RideRepository(db).update_ride_for(driver, identifier, body.to_entity())
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except InvalidDataError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return Response(status_code=204)


@router.delete(
    "/{identifier}",
    status_code=204,
    response_class=Response,
    summary="Delete one of a driver's rides",
)
@limiter.limit(RATE_LIMIT)
async def delete_ride(
    request: Request,
    pseudonym: str,
    identifier: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        await RideRepository(db).delete_ride_for(driver, identifier)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Response(status_code=204)
