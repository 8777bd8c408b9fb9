from __future__ import annotations
import io
import logging
import os
import re
from datetime import date, datetime
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from utils.exceptions import StructuralError, WorkbookReadError
from utils.models import (
    MonthColumn,
    OrderDecision,
    ParseResult,
    ProductRecord,
    RiskCategory,
    WarehouseStatus,
)
from utils.months import calculate_forecast_month, lookup_month

logger = logging.getLogger(__name__)

WorkbookSource = Union[str, os.PathLike, bytes, io.IOBase]

NAME_COLUMN = 0
LEGACY_MONTH_COLUMNS = range(1, 11)  # Januari..Oktober, layout lama


class FieldSpec(NamedTuple):
    name: str
    offset: int
    kind: str  # "number" | "text"
    aliases: Tuple[str, ...]


# Kolom setelah blok bulan, urutan dan posisi mengikuti template lama (kolom 11-29).
# Alias sudah dalam bentuk ternormalisasi (huruf kecil, tanpa spasi/tanda baca).
TRAILING_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("total_qty_out", 11, "number", ("totalqtyout", "totalqty", "qtyout", "totalterjual")),
    FieldSpec("rumus_bantuan", 12, "number", ("rumusbantuan", "rumus")),
    FieldSpec("order", 13, "number", ("order",)),
    FieldSpec("rekomendasi_order", 14, "number", ("rekomendasiorder", "rekomendasi")),
    FieldSpec("stok_accurate", 15, "number", ("stokaccurate", "stokakurat", "stok")),
    FieldSpec("pendingan", 16, "number", ("pendingan", "pending")),
    FieldSpec("tanggal_eta", 17, "text", ("tanggaleta", "tgleta")),
    FieldSpec("eta", 18, "number", ("eta",)),
    FieldSpec("rata_rata_kebutuhan", 19, "number", (
        "rataratakebutuhanperbulan", "rataratakebutuhan", "ratarataperbulan",
    )),
    FieldSpec("forecast3", 20, "number", ("forecast3bulan", "forecast3", "forecast")),
    FieldSpec("indeks_musiman", 21, "number", ("indeksmusiman", "seasonalindex")),
    FieldSpec("kapasitas_gudang", 22, "number", ("kapasitasgudang",)),
    FieldSpec("status_gudang", 23, "text", ("statusgudang",)),
    FieldSpec("minimum_stok", 24, "number", ("minimumstok", "minstok")),
    FieldSpec("kategori_risiko", 25, "text", ("kategoririsiko", "risiko")),
    FieldSpec("order_otomatis", 26, "number", ("orderotomatis",)),
    FieldSpec("order_tidak_order", 27, "text", ("ordertidakorder", "keputusanorder")),
    FieldSpec("meeting", 28, "text", ("meeting", "catatanmeeting")),
    FieldSpec("kubikasi", 29, "number", ("kubikasi",)),
)

LEGACY_FIELD_COLUMNS: Dict[str, int] = {f.name: f.offset for f in TRAILING_FIELDS}

# Label lama -> enum. Satu-satunya tempat pencocokan teks dilakukan.
RISK_HIGH_MARKERS = ("tinggi", "🔝")
ORDER_MARKERS = ("Order", "🔁")
NO_ORDER_MARKERS = ("Tidak", "❗")
OVERLOAD_MARKERS = ("Overload", "⚠️")


class MonthDetection(NamedTuple):
    indices: List[int]
    names: List[str]
    columns: List[MonthColumn]


# ------------------------
# Cell coercion
# ------------------------

def _is_missing(value: object) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def to_number(value: object, log: Optional[logging.Logger] = None) -> float:
    """Coerce a cell to a number; anything unusable becomes 0.

    Non-blank cells that cannot be read as a number are logged at DEBUG.
    """
    if _is_missing(value):
        return 0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
    if isinstance(value, (str, int, float, np.number, np.bool_)):
        number = pd.to_numeric(value, errors="coerce")
    else:
        number = np.nan
    if pd.isna(number) or not np.isfinite(number):
        (log or logger).debug("Nilai tidak numerik %r diganti 0", value)
        return 0
    return float(number)


def to_text(value: object) -> str:
    if _is_missing(value):
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, (int, float, np.number)) and not isinstance(value, (bool, np.bool_)):
        if value == 0:
            return ""
        if float(value).is_integer():
            return str(int(value))
    return str(value)


def _cell(row: Sequence[object], index: int) -> object:
    if 0 <= index < len(row):
        return row[index]
    return None


# ------------------------
# Header detection
# ------------------------

def detect_month_columns(headers: Sequence[object]) -> MonthDetection:
    """Find month-name header cells and order them by calendar month.

    Ordering is by month index, not column position, so out-of-order sheets
    still yield a chronological sequence. Duplicate months are kept and stay in
    their original relative order (``sorted`` is stable).
    """
    found: List[MonthColumn] = []
    for col_index, header in enumerate(headers):
        info = lookup_month(header)
        if info is None:
            continue
        found.append(MonthColumn(col_index=col_index, month_index=info.index, name=info.name))
        logger.debug("Kolom bulan %s ditemukan di kolom %d (%r)", info.name, col_index, header)

    columns = sorted(found, key=lambda m: m.month_index)
    return MonthDetection(
        indices=[m.col_index for m in columns],
        names=[m.name for m in columns],
        columns=columns,
    )


def normalize_header(value: object) -> str:
    return re.sub(r"[^0-9a-z]", "", str(value).lower()) if not _is_missing(value) else ""


def resolve_field_columns(headers: Sequence[object]) -> Tuple[Dict[str, int], List[str]]:
    """Bind trailing fields to columns by header name.

    Returns the column per field and the fields that fell back to their
    legacy fixed offset.
    """
    positions: Dict[str, int] = {}
    for col_index, header in enumerate(headers):
        key = normalize_header(header)
        if key and key not in positions:
            positions[key] = col_index

    columns: Dict[str, int] = {}
    fallback: List[str] = []
    for spec in TRAILING_FIELDS:
        col = next((positions[a] for a in spec.aliases if a in positions), None)
        if col is None:
            fallback.append(spec.name)
            col = spec.offset
        columns[spec.name] = col
    return columns, fallback


# ------------------------
# Row mapping
# ------------------------

def has_product_name(row: Sequence[object]) -> bool:
    value = _cell(row, NAME_COLUMN)
    if _is_missing(value):
        return False
    if isinstance(value, (int, float, np.number)) and value == 0:
        return False
    return str(value).strip() != ""


def classify_risk(label: str) -> RiskCategory:
    if any(marker in label for marker in RISK_HIGH_MARKERS):
        return RiskCategory.HIGH
    return RiskCategory.NORMAL


def classify_order_decision(label: str) -> OrderDecision:
    if any(marker in label for marker in ORDER_MARKERS):
        return OrderDecision.NEEDS_ORDER
    if any(marker in label for marker in NO_ORDER_MARKERS):
        return OrderDecision.NO_ORDER
    return OrderDecision.UNSPECIFIED


def is_marked_no_order(label: str) -> bool:
    return any(marker in label for marker in NO_ORDER_MARKERS)


def classify_warehouse(label: str) -> WarehouseStatus:
    if any(marker in label for marker in OVERLOAD_MARKERS):
        return WarehouseStatus.OVERLOAD
    return WarehouseStatus.SAFE


def map_row(
    row: Sequence[object],
    month_columns: Sequence[MonthColumn],
    month_names: Tuple[str, ...],
    field_columns: Optional[Mapping[str, int]] = None,
    log: Optional[logging.Logger] = None,
) -> ProductRecord:
    field_columns = field_columns or LEGACY_FIELD_COLUMNS

    monthly_values = tuple((m.name, to_number(_cell(row, m.col_index), log)) for m in month_columns)
    legacy_months = tuple(to_number(_cell(row, i), log) for i in LEGACY_MONTH_COLUMNS)

    fields: Dict[str, object] = {}
    for spec in TRAILING_FIELDS:
        raw = _cell(row, field_columns.get(spec.name, spec.offset))
        fields[spec.name] = to_number(raw, log) if spec.kind == "number" else to_text(raw)

    return ProductRecord(
        nama_barang=str(_cell(row, NAME_COLUMN)).strip(),
        monthly_values=monthly_values,
        month_columns=month_names,
        legacy_months=legacy_months,
        risk=classify_risk(fields["kategori_risiko"]),
        order_decision=classify_order_decision(fields["order_tidak_order"]),
        warehouse_status=classify_warehouse(fields["status_gudang"]),
        marked_no_order=is_marked_no_order(fields["order_tidak_order"]),
        **fields,
    )


# ------------------------
# Parse entry points
# ------------------------

def parse_rows(rows: Sequence[Sequence[object]], log: Optional[logging.Logger] = None) -> ParseResult:
    """Turn raw sheet rows (row 0 = header) into a ParseResult.

    Raises StructuralError when the sheet has fewer than two rows or no month
    columns. Skipped rows and coercion fallbacks are not errors.
    """
    log = log or logger
    warnings: List[str] = []

    log.info("Total rows: %d", len(rows))
    if len(rows) < 2:
        raise StructuralError("File tidak memiliki data yang cukup")

    headers = list(rows[0])
    detection = detect_month_columns(headers)
    if not detection.columns:
        log.error("Tidak ada kolom bulan yang terdeteksi. Header: %s", headers[:15])
        raise StructuralError(
            "Tidak ditemukan kolom bulan dalam file Excel. "
            "Pastikan header memiliki nama bulan seperti Jan, Februari, Maret, dll."
        )

    month_names = tuple(detection.names)
    log.info("Ditemukan %d kolom bulan: %s", len(month_names), list(month_names))

    duplicates = sorted({n for n in month_names if month_names.count(n) > 1}, key=month_names.index)
    if duplicates:
        warnings.append(
            "Kolom bulan duplikat terdeteksi dan dipertahankan terpisah: " + ", ".join(duplicates)
        )

    forecast_month = calculate_forecast_month(month_names[-1])
    log.info("Last month: %s -> Forecast month: %s", month_names[-1], forecast_month)

    field_columns, fallback = resolve_field_columns(headers)
    if len(fallback) == len(TRAILING_FIELDS):
        warnings.append("Header kolom tambahan tidak dikenali; memakai posisi kolom tetap 11-29.")
    elif fallback:
        warnings.append("Kolom memakai posisi tetap karena header tidak ditemukan: " + ", ".join(fallback))

    products: List[ProductRecord] = []
    for offset, row in enumerate(rows[1:]):
        if not has_product_name(row):
            log.debug("Skipping row %d - no product name", offset + 2)
            continue
        products.append(map_row(row, detection.columns, month_names, field_columns, log))

    for message in warnings:
        log.warning(message)
    log.info("Successfully parsed %d products", len(products))

    return ParseResult(
        products=tuple(products),
        month_columns=month_names,
        forecast_month=forecast_month,
        warnings=tuple(warnings),
    )


def read_workbook_rows(source: WorkbookSource) -> List[List[object]]:
    """Read the first worksheet as a list of rows; empty cells become None."""
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        df = pd.read_excel(source, sheet_name=0, header=None, dtype=object, engine="openpyxl")
    except Exception as e:
        raise WorkbookReadError(f"Gagal membaca file Excel: {e}") from e
    return [[None if _is_missing(v) else v for v in row] for row in df.itertuples(index=False, name=None)]


def parse_workbook(source: WorkbookSource, log: Optional[logging.Logger] = None) -> ParseResult:
    return parse_rows(read_workbook_rows(source), log=log)
