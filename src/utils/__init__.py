from utils.definitions import COUNTRIES, FISCAL_YEARS, SECTORS
from utils.helper import to_budget, to_number

__all__ = [
    "COUNTRIES",
    "FISCAL_YEARS",
    "SECTORS",
    "to_budget",
    "to_number",
]
