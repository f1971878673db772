"""Keyword search over a user's own cars."""

from sqlalchemy.orm import Session

from carhub.models.car import Car


def car_matches(car: Car, keyword: str) -> bool:
    """Case-insensitive substring match on title, description or any one tag."""
    needle = keyword.lower()
    if needle in (car.title or "").lower():
        return True
    if needle in (car.description or "").lower():
        return True
    return any(needle in tag.lower() for tag in car.tags or [])


def search_cars(db: Session, owner_id: int, keyword: str | None) -> list[Car]:
    """Return the owner's cars matching ``keyword``, ordered by id.

    An empty or missing keyword matches every car the owner has. Any other
    keyword is matched as given, whitespace included.
    """
    cars = db.query(Car).filter(Car.owner_id == owner_id).order_by(Car.id).all()
    if not keyword:
        return cars
    return [car for car in cars if car_matches(car, keyword)]
