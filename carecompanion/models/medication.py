"""Medication model for the medication tracker."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from carecompanion.db.base import Base, TimestampMixin


class Medication(Base, TimestampMixin):
    """A medication on the user's schedule."""

    __tablename__ = "medications"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    dosage: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    frequency: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    time: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    taken: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Medication {self.name} {self.dosage}>"
