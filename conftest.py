import io

import pytest
from openpyxl import Workbook

from utils.excel_parser import (
    TRAILING_FIELDS,
    classify_order_decision,
    classify_risk,
    classify_warehouse,
    is_marked_no_order,
)
from utils.models import ProductRecord

LEGACY_MONTHS = ["Jan", "Februari", "Maret", "April", "Mei", "Juni", "Juli", "Agustus", "September", "Oktober"]
LEGACY_TRAILING = [
    "TotalQtyOut", "Rumus Bantuan", "Order", "Rekomendasi Order", "Stok Accurate", "Pendingan",
    "Tanggal ETA", "ETA", "Rata-rata Kebutuhan Perbulan", "Forecast 3 Bulan", "Indeks Musiman",
    "Kapasitas Gudang", "Status Gudang", "Minimum Stok", "Kategori Risiko", "Order Otomatis",
    "Order/Tidak Order", "Meeting", "Kubikasi",
]


@pytest.fixture
def legacy_header():
    """Header template lama: nama, 10 bulan, 19 kolom tambahan (30 kolom)."""
    return ["Nama Barang"] + LEGACY_MONTHS + LEGACY_TRAILING


@pytest.fixture
def legacy_row():
    def build(name, months=None, **fields):
        months = list(months) if months is not None else [0] * 10
        trailing = [fields.get(spec.name) for spec in TRAILING_FIELDS]
        return [name] + months + trailing
    return build


@pytest.fixture
def workbook_bytes():
    """Build an .xlsx in memory; each sheet is a list of rows."""
    def build(*sheets):
        wb = Workbook()
        wb.remove(wb.active)
        for i, rows in enumerate(sheets):
            ws = wb.create_sheet(f"Sheet{i + 1}")
            for row in rows:
                ws.append(row)
        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
    return build


@pytest.fixture
def make_product():
    def build(name="Produk", months=(("Januari", 0),), **fields):
        month_values = tuple(months)
        return ProductRecord(
            nama_barang=name,
            monthly_values=month_values,
            month_columns=tuple(m for m, _ in month_values),
            risk=classify_risk(fields.get("kategori_risiko", "")),
            order_decision=classify_order_decision(fields.get("order_tidak_order", "")),
            warehouse_status=classify_warehouse(fields.get("status_gudang", "")),
            marked_no_order=is_marked_no_order(fields.get("order_tidak_order", "")),
            **fields,
        )
    return build
