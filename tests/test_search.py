"""Keyword search tests."""

from carhub.models.car import Car
from carhub.services.auth import create_user
from carhub.services.search import car_matches, search_cars


def make_car(db, owner_id, title, description=None, tags=()):
    car = Car(
        owner_id=owner_id,
        title=title,
        description=description,
        tags=list(tags),
        images=["uploads/placeholder.png"],
    )
    db.add(car)
    db.commit()
    db.refresh(car)
    return car


def test_car_matches_each_field():
    """Test title, description and tag matches, case-insensitively."""
    car = Car(title="SUV Deal", description="2020 Toyota", tags=["Dealer1", "AWD"])
    assert car_matches(car, "suv")
    assert car_matches(car, "TOYOTA")
    assert car_matches(car, "dealer")
    assert car_matches(car, "awd")
    assert not car_matches(car, "honda")


def test_car_matches_single_tag_only():
    """Test a keyword spanning two tags does not match."""
    car = Car(title="Car", description=None, tags=["Red", "Sedan"])
    assert not car_matches(car, "redsedan")
    assert not car_matches(car, "red,sedan")


def test_search_scoped_to_owner(db):
    """Test search never returns another owner's cars."""
    john = create_user(db, "John", "john12", "john@example.com", "password123")
    jane = create_user(db, "Jane", "jane34", "jane@example.com", "password123")
    mine = make_car(db, john.id, "SUV Deal", "2020 Toyota", ["SUV"])
    make_car(db, jane.id, "Toyota Corolla", "Toyota", ["Toyota"])

    results = search_cars(db, john.id, "toyota")
    assert [car.id for car in results] == [mine.id]


def test_empty_keyword_returns_all_owned(db):
    """Test an empty or missing keyword lists every owned car."""
    john = create_user(db, "John", "john12", "john@example.com", "password123")
    first = make_car(db, john.id, "One")
    second = make_car(db, john.id, "Two")

    expected = [first.id, second.id]
    assert [car.id for car in search_cars(db, john.id, "")] == expected
    assert [car.id for car in search_cars(db, john.id, None)] == expected


def test_keyword_whitespace_is_significant(db):
    """Test surrounding spaces are part of the keyword, not trimmed."""
    john = create_user(db, "John", "john12", "john@example.com", "password123")
    suv = make_car(db, john.id, "SUV Deal", "2020", ["Toyota"])
    make_car(db, john.id, "Sedan", "Honda", ["Civic"])

    assert [car.id for car in search_cars(db, john.id, " ")] == [suv.id]
    assert search_cars(db, john.id, "deal ") == []
    assert [car.id for car in search_cars(db, john.id, " deal")] == [suv.id]


def test_search_is_stable(db):
    """Test the same query twice gives the same result."""
    john = create_user(db, "John", "john12", "john@example.com", "password123")
    for title in ("Blue Van", "Blue Truck", "Red Van"):
        make_car(db, john.id, title)

    first = [car.id for car in search_cars(db, john.id, "blue")]
    second = [car.id for car in search_cars(db, john.id, "blue")]
    assert first == second
    assert len(first) == 2
