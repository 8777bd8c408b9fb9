from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, TypeVar

import pandas as pd
import streamlit as st

from config.settings import ITEMS_PER_PAGE
from utils.analysis import calculate_summary
from utils.excel_parser import WorkbookSource, parse_workbook
from utils.exceptions import ParseError, StructuralError, EmptyDatasetError, WorkbookReadError
from utils.models import AnalysisSummary, OrderDecision, ParseResult, ProductRecord

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Terjadi kesalahan saat memproses file"
READ_ERROR = "Gagal membaca file Excel. Pastikan file tidak rusak lalu pilih ulang file."

STATUS_FILTERS = {
    "all": "Semua Status",
    "order": "Perlu Order",
    "noorder": "Tidak Perlu Order",
}

T = TypeVar("T")


@dataclass(frozen=True)
class UploadOutcome:
    result: Optional[ParseResult] = None
    summary: Optional[AnalysisSummary] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    total_pages: int
    start: int
    end: int
    total: int

    @property
    def caption(self) -> str:
        first = self.start + 1 if self.total else 0
        return f"Menampilkan {first}-{self.end} dari {self.total} produk"


def parse_and_check(source: WorkbookSource) -> ParseResult:
    result = parse_workbook(source)
    if not result.products:
        raise EmptyDatasetError("File Excel tidak mengandung data yang valid")
    return result


# Caching parse per isi file; upload yang sama tidak di-parse ulang saat rerun
@st.cache_data(show_spinner=False)
def load_parsed_workbook(data: bytes) -> ParseResult:
    return parse_and_check(data)


def process_upload(source: WorkbookSource, parser=parse_and_check) -> UploadOutcome:
    """Single handler for an upload: parse, summarise, or turn any failure into one message.

    On failure nothing from the attempt is kept; result and summary are None.
    """
    try:
        result = parser(source)
    except StructuralError as e:
        logger.warning("Struktur file tidak valid: %s", e)
        return UploadOutcome(error=str(e))
    except WorkbookReadError as e:
        logger.error("Error parsing file: %s", e)
        return UploadOutcome(error=READ_ERROR)
    except ParseError as e:
        logger.error("Error parsing file: %s", e)
        return UploadOutcome(error=str(e) or GENERIC_ERROR)
    except Exception:
        logger.exception("Unexpected error while processing upload")
        return UploadOutcome(error=GENERIC_ERROR)
    return UploadOutcome(result=result, summary=calculate_summary(result.products))


# ------------------------
# Session state
# ------------------------

SESSION_DEFAULTS = {
    "parse_result": None,
    "summary": None,
    "upload_error": "",
    "last_upload": None,
    "uploader_key": 0,
}


def init_session_state(state) -> None:
    for k, v in SESSION_DEFAULTS.items():
        state.setdefault(k, v)


def apply_outcome(state, outcome: UploadOutcome) -> None:
    # Hasil lama selalu diganti utuh, termasuk saat gagal
    state["parse_result"] = outcome.result
    state["summary"] = outcome.summary
    state["upload_error"] = outcome.error or ""


def reset_state(state) -> None:
    state["parse_result"] = None
    state["summary"] = None
    state["upload_error"] = ""
    state["last_upload"] = None
    state["uploader_key"] = state.get("uploader_key", 0) + 1


# ------------------------
# Table helpers
# ------------------------

def filter_products(
    products: Sequence[ProductRecord],
    search: str = "",
    status: str = "all",
) -> List[ProductRecord]:
    if status not in STATUS_FILTERS:
        raise ValueError(f"Status filter tidak dikenal: {status}")
    term = (search or "").lower()
    out = []
    for p in products:
        if term and term not in p.nama_barang.lower():
            continue
        if status == "order" and p.order_decision is not OrderDecision.NEEDS_ORDER:
            continue
        if status == "noorder" and not p.marked_no_order:
            continue
        out.append(p)
    return out


def paginate(items: Sequence[T], page: int = 1, per_page: int = ITEMS_PER_PAGE) -> Page[T]:
    total = len(items)
    total_pages = max(1, math.ceil(total / per_page))
    page = min(max(1, page), total_pages)
    start = (page - 1) * per_page
    end = min(start + per_page, total)
    return Page(list(items[start:end]), page, total_pages, start, end, total)


def products_to_frame(products: Sequence[ProductRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Nama Barang": p.nama_barang,
                "Total Qty": p.total_qty_out,
                "Stok": p.stok_accurate,
                "Forecast": p.forecast3,
                "Rekomendasi": p.rekomendasi_order,
                "Status": p.order_tidak_order,
                "Risiko": p.kategori_risiko,
            }
            for p in products
        ],
        columns=["Nama Barang", "Total Qty", "Stok", "Forecast", "Rekomendasi", "Status", "Risiko"],
    )
