"""Declarative Base class to be used by SQLAlchemy database models."""

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    # Sector splits are stored as a JSON object of sector -> percentage points
    type_annotation_map = {
        dict[str, float]: JSON,
    }
