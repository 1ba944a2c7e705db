from models.base import Base

from sqlalchemy import (
    Float,
    Integer,
    String,
    PrimaryKeyConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column


class AllocationRecord(Base):  # type: ignore[misc]
    """
    Represents one project or country note (CN) with its budget split across sectors.
    """

    __tablename__ = "allocation_records"

    # Surrogate key, also defines the order records were added in
    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # User supplied identifier, not unique
    record_id: Mapped[str] = mapped_column(String, nullable=False, default="", index=True)
    name: Mapped[str] = mapped_column(String, nullable=False, default="")
    # "PROJECT" or "CN"
    record_type: Mapped[str] = mapped_column(String, nullable=False, default="PROJECT")
    country: Mapped[str] = mapped_column(String, nullable=False, default="")
    fiscal_year: Mapped[str] = mapped_column(String, nullable=False, default="")
    # Total budget in USD, never negative
    budget: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    # Sector -> percentage points of the budget
    sector_split: Mapped[dict[str, float]] = mapped_column(nullable=False, default=dict)


class SectorTarget(Base):  # type: ignore[misc]
    """
    Strategic target percentage for one sector in one country.
    """

    __tablename__ = "sector_targets"

    country: Mapped[str] = mapped_column(String, nullable=False)
    sector: Mapped[str] = mapped_column(String, nullable=False)
    # Percentage points, targets of a country are not required to sum to 100
    value: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    __table_args__ = (PrimaryKeyConstraint("country", "sector", name="pk_sector_targets"),)
