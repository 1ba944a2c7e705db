"""
Sample projects and country notes preloaded into a fresh dashboard.
Sector splits are in percentage points and sum to 100 for every record.
"""

import logging

from utils.definitions import DEFAULT_TARGETS
from utils.store import RecordStore, TargetStore

logger = logging.getLogger(__name__)

SAMPLE_RECORDS: list[dict] = [
    {
        "id": "HN-001",
        "name": "Rural Value Chains",
        "record_type": "PROJECT",
        "country": "Honduras",
        "fiscal_year": "FY25",
        "budget": 30_760,
        "sector_split": {"Food Security & Livelihoods": 100},
    },
    {
        "id": "HN-002",
        "name": "Violence Prevention in Urban Communities",
        "record_type": "PROJECT",
        "country": "Honduras",
        "fiscal_year": "FY25",
        "budget": 85_000,
        "sector_split": {"Peacebuilding": 80, "Education": 20},
    },
    {
        "id": "HN-003",
        "name": "Emergency Response Dry Corridor",
        "record_type": "PROJECT",
        "country": "Honduras",
        "fiscal_year": "FY26",
        "budget": 42_500,
        "sector_split": {"Humanitarian Assistance": 70, "Food Security & Livelihoods": 30},
    },
    {
        "id": "HN-CN-01",
        "name": "Youth Reintegration",
        "record_type": "CN",
        "country": "Honduras",
        "fiscal_year": "FY25",
        "budget": 50_000,
        "sector_split": {"Peacebuilding": 60, "Education": 40},
    },
    {
        "id": "HN-CN-02",
        "name": "Community Health Posts",
        "record_type": "CN",
        "country": "Honduras",
        "fiscal_year": "FY27",
        "budget": 28_000,
        "sector_split": {"Health": 100},
    },
    {
        "id": "NI-001",
        "name": "Maternal and Child Health",
        "record_type": "PROJECT",
        "country": "Nicaragua",
        "fiscal_year": "FY25",
        "budget": 64_200,
        "sector_split": {"Health": 75, "Food Security & Livelihoods": 25},
    },
    {
        "id": "NI-002",
        "name": "Literacy for Rural Schools",
        "record_type": "PROJECT",
        "country": "Nicaragua",
        "fiscal_year": "FY26",
        "budget": 38_900,
        "sector_split": {"Education": 100},
    },
    {
        "id": "NI-CN-01",
        "name": "Flood Preparedness",
        "record_type": "CN",
        "country": "Nicaragua",
        "fiscal_year": "FY26",
        "budget": 22_000,
        "sector_split": {"Humanitarian Assistance": 50, "Peacebuilding": 50},
    },
]


def seed_stores(record_store: RecordStore, target_store: TargetStore) -> None:
    """Load the default targets and the sample records into empty stores."""
    if not target_store.all():
        target_store.load(DEFAULT_TARGETS)
        logger.info("Loaded default targets for %d countries", len(DEFAULT_TARGETS))
    if len(record_store) == 0:
        record_store.add_many(SAMPLE_RECORDS)
        logger.info("Loaded %d sample records", len(SAMPLE_RECORDS))
