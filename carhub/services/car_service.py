"""Car listing service: owner-scoped create, list, search, update and delete."""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from carhub.exceptions import AuthorizationFailure, NotFound, ValidationError
from carhub.models.car import Car
from carhub.schemas.car import CarUpdate
from carhub.services.search import search_cars
from carhub.services.storage import AttachmentStorage, AttachmentUpload
from carhub.tasks.attachments import schedule_release

logger = logging.getLogger(__name__)

DEFAULT_MAX_IMAGES = 10


def normalize_tags(tags: str | Iterable[str] | None) -> list[str]:
    """Turn a comma-separated string or a list of strings into clean tags.

    Only the string form is split; list elements are kept whole.
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    return [tag.strip() for tag in map(str, tags) if tag.strip()]


def authorize(car: Car, owner_id: int) -> None:
    """Raise AuthorizationFailure unless ``owner_id`` owns ``car``."""
    if car.owner_id != owner_id:
        raise AuthorizationFailure()


class CarService:
    """Service for car listings belonging to a single caller."""

    def __init__(self, db: Session, storage: AttachmentStorage, max_images: int = DEFAULT_MAX_IMAGES):
        self.db = db
        self.storage = storage
        self.max_images = max_images

    def check_image_count(self, count: int) -> None:
        """Raise ValidationError when a listing would get too many images."""
        if count > self.max_images:
            raise ValidationError(f"At most {self.max_images} images are allowed")

    def create(
        self,
        owner_id: int,
        title: str | None,
        description: str | None,
        tags: str | Iterable[str] | None,
        uploads: list[AttachmentUpload] | None,
    ) -> Car:
        """Validate, store the images, then insert the car.

        Nothing is written until every field has been checked. Images that
        were stored before a later failure are left in place.
        """
        title = (title or "").strip()
        description = (description or "").strip()
        tag_list = normalize_tags(tags)
        uploads = uploads or []

        if not title or not description or not tag_list or not uploads:
            raise ValidationError("All fields are required")
        self.check_image_count(len(uploads))

        images = [self.storage.store(upload.data, upload.filename) for upload in uploads]

        car = Car(
            owner_id=owner_id,
            title=title,
            description=description,
            tags=tag_list,
            images=images,
        )
        self.db.add(car)
        self.db.commit()
        self.db.refresh(car)

        logger.info(f"User {owner_id} created car {car.id} with {len(images)} image(s)")
        return car

    def list_owned(self, owner_id: int) -> list[Car]:
        """Get every car owned by ``owner_id``."""
        return self.db.query(Car).filter(Car.owner_id == owner_id).order_by(Car.id).all()

    def search(self, owner_id: int, keyword: str | None) -> list[Car]:
        """Search the caller's cars by title, description or tag."""
        return search_cars(self.db, owner_id, keyword)

    def get_for_owner(self, owner_id: int, car_id: int) -> Car:
        """Load a car and check the caller owns it."""
        car = self.db.query(Car).filter(Car.id == car_id).first()
        if car is None:
            raise NotFound("Car not found")
        authorize(car, owner_id)
        return car

    def update(self, owner_id: int, car_id: int, patch: CarUpdate) -> Car:
        """Apply the fields present in ``patch``; owner and images never change."""
        car = self.get_for_owner(owner_id, car_id)
        fields = patch.model_fields_set

        if "title" in fields:
            title = (patch.title or "").strip()
            if not title:
                raise ValidationError("Title cannot be empty")
            car.title = title
        if "description" in fields:
            car.description = patch.description
        if "tags" in fields:
            car.tags = normalize_tags(patch.tags)

        self.db.commit()
        self.db.refresh(car)

        logger.info(f"User {owner_id} updated car {car.id}: {sorted(fields)}")
        return car

    def delete(self, owner_id: int, car_id: int) -> None:
        """Delete the car, then release its images best effort."""
        car = self.get_for_owner(owner_id, car_id)
        images = list(car.images or [])

        self.db.delete(car)
        self.db.commit()

        logger.info(f"User {owner_id} deleted car {car_id}")
        schedule_release(images)
