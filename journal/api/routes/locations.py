"""
Location endpoints (nested under a driver)
==========================================

POST   /api/drivers/{pseudonym}/locations                -- create
GET    /api/drivers/{pseudonym}/locations                -- list
GET    /api/drivers/{pseudonym}/locations/{identifier}   -- get one
PUT    /api/drivers/{pseudonym}/locations/{identifier}   -- replace
DELETE /api/drivers/{pseudonym}/locations/{identifier}   -- delete (409 while a stop uses it)

Names are unique per driver; collisions answer 409.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from journal.api.dependencies import get_db
from journal.api.middleware import RATE_LIMIT, limiter
from journal.api.schemas import LocationRequest, LocationResponse
from journal.domain.exceptions import ConflictError, NotFoundError
from journal.infrastructure.repositories import DriverRepository, LocationRepository

router = APIRouter(prefix="/drivers/{pseudonym}/locations", tags=["locations"])


@router.post(
    "",
    status_code=201,
    response_class=Response,
    summary="Create a location for a driver",
    responses={409: {"description": "The driver already has a location with this name"}},
)
@limiter.limit(RATE_LIMIT)
async def create_location(
    request: Request,
    pseudonym: str,
    body: LocationRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        await LocationRepository(db).create_new_location_for(
            driver,
            name=body.name,
            latitude=body.latitude,
            longitude=body.longitude,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return Response(status_code=201)


@router.get(
    "",
    response_model=list[LocationResponse],
    summary="List a driver's locations",
)
@limiter.limit(RATE_LIMIT)
async def list_locations(
    request: Request,
    pseudonym: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        return await LocationRepository(db).find_all_locations_for(driver)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.get(
    "/{identifier}",
    response_model=LocationResponse,
    summary="Get one of a driver's locations",
)
@limiter.limit(RATE_LIMIT)
async def get_location(
    request: Request,
    pseudonym: str,
    identifier: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        return await LocationRepository(db).find_location_for(driver, identifier)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.put(
    "/{identifier}",
    status_code=204,
    response_class=Response,
    summary="Replace one of a driver's locations",
)
@limiter.limit(RATE_LIMIT)
async def update_location(
    request: Request,
    pseudonym: str,
    identifier: str,
    body: LocationRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        await LocationRepository(db).update_location_for(
            driver,
            identifier,
            name=body.name,
            latitude=body.latitude,
            longitude=body.longitude,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return Response(status_code=204)


@router.delete(
    "/{identifier}",
    status_code=204,
    response_class=Response,
    summary="Delete one of a driver's locations",
    responses={409: {"description": "A stop still references the location"}},
)
@limiter.limit(RATE_LIMIT)
async def delete_location(
    request: Request,
    pseudonym: str,
    identifier: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        driver = await DriverRepository(db).find_by_id(pseudonym)
        await LocationRepository(db).delete_location_for(driver, identifier)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return Response(status_code=204)
