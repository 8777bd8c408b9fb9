from __future__ import annotations
import logging
from typing import Dict, NamedTuple, Optional

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
]

UNKNOWN_MONTH = "Unknown"


class MonthInfo(NamedTuple):
    index: int
    name: str


def _info(index: int) -> MonthInfo:
    return MonthInfo(index, MONTH_NAMES[index])


# Nama bulan Indonesia (lengkap + singkatan) ke index 0..11
MONTH_MAPPING: Dict[str, MonthInfo] = {
    "januari": _info(0),
    "jan": _info(0),
    "februari": _info(1),
    "feb": _info(1),
    "maret": _info(2),
    "mar": _info(2),
    "april": _info(3),
    "apr": _info(3),
    "mei": _info(4),
    "juni": _info(5),
    "jun": _info(5),
    "juli": _info(6),
    "jul": _info(6),
    "agustus": _info(7),
    "agu": _info(7),
    "ags": _info(7),
    "september": _info(8),
    "sep": _info(8),
    "sept": _info(8),
    "oktober": _info(9),
    "okt": _info(9),
    "oct": _info(9),
    "november": _info(10),
    "nov": _info(10),
    "desember": _info(11),
    "des": _info(11),
    "dec": _info(11),
}


def normalize_month_token(value: object) -> Optional[str]:
    if not isinstance(value, str):
        return None
    token = value.strip().lower()
    return token or None


def lookup_month(value: object) -> Optional[MonthInfo]:
    """Exact lookup of a header cell in the month vocabulary (no fuzzy matching)."""
    token = normalize_month_token(value)
    if token is None:
        return None
    return MONTH_MAPPING.get(token)


def calculate_forecast_month(last_month_name: str) -> str:
    """Return the month after `last_month_name`, wrapping Desember to Januari.

    Unrecognised names give ``"Unknown"`` instead of raising; callers treat it
    as an advisory value only.
    """
    info = lookup_month(last_month_name)
    if info is None:
        logger.warning("Bulan terakhir tidak dikenali: %r", last_month_name)
        return UNKNOWN_MONTH
    return MONTH_NAMES[(info.index + 1) % 12]
