"""
Generate mock projects and country notes and load them into the record store.

Run from the src directory:
    python -m scripts.mock_data.populate_store --records 40
"""

import argparse
import logging

from faker import Faker

from database import init_database
from models import AllocationEntry
from utils.definitions import COUNTRIES, FISCAL_YEARS, SECTORS
from utils.sample_data import seed_stores
from utils.store import RecordStore, record_store, target_store

logger = logging.getLogger(__name__)


def _generate_sector_split(fake: Faker, max_sectors: int = 3) -> dict[str, float]:
    """Split 100 percentage points over one to `max_sectors` random sectors."""
    num_sectors = fake.random_int(1, max_sectors)
    sectors = fake.random_elements(SECTORS, length=num_sectors, unique=True)
    # Sorted cut points on 0..100, every sector gets at least one point
    cuts = sorted(fake.random_elements(range(1, 100), length=num_sectors - 1, unique=True))
    bounds = [0, *cuts, 100]
    return {sector: float(bounds[i + 1] - bounds[i]) for i, sector in enumerate(sectors)}


def generate_records(
    num_records: int = 20,
    countries: tuple[str, ...] = COUNTRIES,
    fiscal_years: tuple[str, ...] = FISCAL_YEARS,
    cn_ratio: float = 0.3,
    seed: int | None = None,
) -> list[AllocationEntry]:
    """Generate mock records, about `cn_ratio` of them tagged as country notes."""
    fake = Faker()
    if seed is not None:
        fake.seed_instance(seed)
    records = []
    for _ in range(num_records):
        country = fake.random_element(countries)
        is_cn = fake.random.random() < cn_ratio
        prefix = country[:2].upper() + ("-CN" if is_cn else "")
        records.append(
            AllocationEntry(
                id=f"{prefix}-{fake.random_int(100, 999)}",
                name=fake.catch_phrase(),
                record_type="CN" if is_cn else "PROJECT",
                country=country,
                fiscal_year=fake.random_element(fiscal_years),
                budget=fake.random_int(5, 150) * 1_000,
                sector_split=_generate_sector_split(fake),
            )
        )
    return records


def populate_store(store: RecordStore, num_records: int = 20, seed: int | None = None) -> int:
    records = generate_records(num_records, seed=seed)
    store.add_many(records)
    return len(records)


def main() -> None:
    parser = argparse.ArgumentParser(description="Populate the record store with mock data.")
    parser.add_argument("--records", type=int, default=20, help="Number of records to generate")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible data")
    args = parser.parse_args()

    init_database()
    seed_stores(record_store, target_store)
    added = populate_store(record_store, args.records, args.seed)
    logger.info("Added %d mock records, store now holds %d", added, len(record_store))


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    main()
