"""
Driver endpoints
================

POST   /api/drivers               -- create a driver (201, 409 on duplicate)
GET    /api/drivers               -- list drivers
GET    /api/drivers/{pseudonym}   -- get one driver
PUT    /api/drivers/{pseudonym}   -- replace a driver (422 on identifier mismatch)
DELETE /api/drivers/{pseudonym}   -- delete a driver with its rides and locations
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from journal.api.dependencies import get_db
from journal.api.middleware import RATE_LIMIT, limiter
from journal.api.schemas import DriverRequest, DriverResponse
from journal.domain.exceptions import ConflictError, NotFoundError
from journal.infrastructure.repositories import DriverRepository

router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.post(
    "",
    status_code=201,
    response_class=Response,
    summary="Create a driver",
    responses={409: {"description": "Pseudonym already taken"}},
)
@limiter.limit(RATE_LIMIT)
async def create_driver(
    request: Request,
    body: DriverRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        await DriverRepository(db).create(body.pseudonym)
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return Response(status_code=201)


@router.get("", response_model=list[DriverResponse], summary="List drivers")
@limiter.limit(RATE_LIMIT)
async def list_drivers(request: Request, db: AsyncSession = Depends(get_db)):
    return await DriverRepository(db).find_all()


@router.get("/{pseudonym}", response_model=DriverResponse, summary="Get a driver")
@limiter.limit(RATE_LIMIT)
async def get_driver(
    request: Request,
    pseudonym: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await DriverRepository(db).find_by_id(pseudonym)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.put(
    "/{pseudonym}",
    status_code=204,
    response_class=Response,
    summary="Replace a driver",
)
@limiter.limit(RATE_LIMIT)
async def update_driver(
    request: Request,
    pseudonym: str,
    body: DriverRequest,
    db: AsyncSession = Depends(get_db),
):
    if body.pseudonym != pseudonym:
        raise HTTPException(
            status_code=422,
            detail="URI identifier does not match the body pseudonym",
        )
    try:
        await DriverRepository(db).update(pseudonym)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Response(status_code=204)


@router.delete(
    "/{pseudonym}",
    status_code=204,
    response_class=Response,
    summary="Delete a driver",
    description="Also deletes the driver's rides, their stops and the driver's locations.",
)
@limiter.limit(RATE_LIMIT)
async def delete_driver(
    request: Request,
    pseudonym: str,
    db: AsyncSession = Depends(get_db),
):
    try:
        await DriverRepository(db).delete_by_id(pseudonym)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Response(status_code=204)
