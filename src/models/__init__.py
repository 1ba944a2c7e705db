from models.allocation import AllocationRecord, SectorTarget
from models.entries import AllocationEntry, SectorSummary, normalize_sector_split
from models.base import Base

__all__ = [
    "Base",
    "AllocationRecord",
    "SectorTarget",
    "AllocationEntry",
    "SectorSummary",
    "normalize_sector_split",
]
