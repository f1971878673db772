"""Car listing API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from carhub.api.dependencies import get_car_service, get_current_user
from carhub.models.user import User
from carhub.schemas.car import (
    CarDeleteResponse,
    CarEnvelope,
    CarListEnvelope,
    CarResponse,
    CarUpdate,
)
from carhub.services.car_service import CarService
from carhub.services.storage import AttachmentUpload

router = APIRouter(prefix="/cars", tags=["cars"])


@router.post("", response_model=CarEnvelope, status_code=status.HTTP_201_CREATED)
async def create_car(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CarService, Depends(get_car_service)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    tags: Annotated[list[str] | None, Form()] = None,
    images: Annotated[list[UploadFile] | None, File(description="One or more car images")] = None,
):
    """Create a new car listing.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    images = images or []
    # Checked before any file is read into memory
    service.check_image_count(len(images))

    # A single form value may be a comma-separated tag string
    tag_input = tags[0] if tags and len(tags) == 1 else tags

    uploads = []
    for image in images:
        uploads.append(AttachmentUpload(filename=image.filename, data=await image.read()))

    car = service.create(current_user.id, title, description, tag_input, uploads)
    return CarEnvelope(message="Car created successfully", car=CarResponse.model_validate(car))


@router.get("", response_model=CarListEnvelope)
def get_cars(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CarService, Depends(get_car_service)],
):
    """Get all cars owned by the current user."""
    cars = service.list_owned(current_user.id)
    return CarListEnvelope(
        message="Cars retrieved successfully",
        cars=[CarResponse.model_validate(car) for car in cars],
    )


@router.get("/search", response_model=CarListEnvelope)
def search_cars(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CarService, Depends(get_car_service)],
    keyword: str | None = None,
):
    """Search the current user's cars by title, description or tags."""
    cars = service.search(current_user.id, keyword)
    return CarListEnvelope(
        message="Cars retrieved successfully",
        cars=[CarResponse.model_validate(car) for car in cars],
    )


@router.put("/{car_id}", response_model=CarEnvelope)
def update_car(
    car_id: int,
    car_data: CarUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CarService, Depends(get_car_service)],
):
    """Update title, description or tags of a car."""
    car = service.update(current_user.id, car_id, car_data)
    return CarEnvelope(message="Car updated successfully", car=CarResponse.model_validate(car))


@router.delete("/{car_id}", response_model=CarDeleteResponse)
def delete_car(
    car_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CarService, Depends(get_car_service)],
):
    """Delete a car and release its images."""
    service.delete(current_user.id, car_id)
    return CarDeleteResponse(message="Car removed successfully")
