"""Car listing model."""

from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from carhub.database import Base
from carhub.models.mixins import TimestampMixin


class Car(Base, TimestampMixin):
    """A car listing owned by a single user."""

    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)  # e.g. ["SUV", "Toyota", "Dealer1"]
    images = Column(JSON, nullable=False, default=list)  # attachment locators

    # Relationships
    owner = relationship("User", backref="cars")
