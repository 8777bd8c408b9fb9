from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from config.settings import SEASONAL_TOP_COUNT, SUMMARY_DETAIL_COUNT, TOP_PRODUCTS_COUNT
from utils.models import AnalysisSummary, DistributionSlice, ProductRecord, SummaryCard

GREEN = "#22c55e"
RED = "#ef4444"
BLUE = "#3b82f6"
SLATE = "#94a3b8"

RANKING_METRICS = (
    "total_qty_out",
    "rekomendasi_order",
    "forecast3",
    "indeks_musiman",
    "stok_accurate",
    "rata_rata_kebutuhan",
    "minimum_stok",
    "kubikasi",
)


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Format a number the id-ID way: 1.234 and 1.234,5."""
    if float(value).is_integer():
        return f"{int(value):,}".replace(",", ".")
    text = f"{value:,.2f}".rstrip("0").rstrip(".")
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


# ------------------------
# Status filters
# ------------------------

def get_products_needing_order(products: Iterable[ProductRecord]) -> List[ProductRecord]:
    return [p for p in products if p.needs_order]


def get_high_risk_products(products: Iterable[ProductRecord]) -> List[ProductRecord]:
    return [p for p in products if p.is_high_risk]


def get_overloaded_products(products: Iterable[ProductRecord]) -> List[ProductRecord]:
    return [p for p in products if p.is_overloaded]


# ------------------------
# Summary & rankings
# ------------------------

def calculate_summary(products: Sequence[ProductRecord]) -> AnalysisSummary:
    total = len(products)
    forecast_sum = sum(p.forecast3 for p in products)
    average = round_half_up(forecast_sum / total) if total else 0
    return AnalysisSummary(
        total_products=total,
        total_order_recommendations=sum(p.rekomendasi_order for p in products),
        products_need_ordering=len(get_products_needing_order(products)),
        average_forecast=average,
        high_risk_products=len(get_high_risk_products(products)),
        warehouse_overload=len(get_overloaded_products(products)),
    )


def get_top_products(
    products: Iterable[ProductRecord],
    count: int = TOP_PRODUCTS_COUNT,
    metric: str = "total_qty_out",
) -> List[ProductRecord]:
    """Highest `count` products by `metric`; equal values keep input order."""
    if metric not in RANKING_METRICS:
        raise ValueError(f"Metrik ranking tidak dikenal: {metric}")
    ranked = sorted(products, key=lambda p: getattr(p, metric), reverse=True)
    return ranked[:max(count, 0)]


def _two_way(products: Sequence[ProductRecord], flagged: int, labels, colors) -> List[DistributionSlice]:
    return [
        DistributionSlice(labels[0], len(products) - flagged, colors[0]),
        DistributionSlice(labels[1], flagged, colors[1]),
    ]


def get_risk_distribution(products: Sequence[ProductRecord]) -> List[DistributionSlice]:
    return _two_way(products, len(get_high_risk_products(products)), ("Normal", "Tinggi"), (GREEN, RED))


def get_warehouse_distribution(products: Sequence[ProductRecord]) -> List[DistributionSlice]:
    return _two_way(products, len(get_overloaded_products(products)), ("Aman", "Overload"), (GREEN, RED))


def get_order_status_distribution(products: Sequence[ProductRecord]) -> List[DistributionSlice]:
    need = len(get_products_needing_order(products))
    return [
        DistributionSlice("Perlu Order", need, BLUE),
        DistributionSlice("Tidak Perlu Order", len(products) - need, SLATE),
    ]


# ------------------------
# Chart data
# ------------------------

def select_display_products(
    products: Sequence[ProductRecord],
    selected: Optional[Sequence[str]] = None,
) -> List[ProductRecord]:
    if selected:
        wanted = set(selected)
        return [p for p in products if p.nama_barang in wanted]
    return get_top_products(products, TOP_PRODUCTS_COUNT)


def month_labels(month_columns: Sequence[str]) -> List[str]:
    """Axis labels, one per month column; repeated months get "(2)", "(3)", ..."""
    seen: Dict[str, int] = {}
    labels = []
    for month in month_columns:
        seen[month] = seen.get(month, 0) + 1
        labels.append(month if seen[month] == 1 else f"{month} ({seen[month]})")
    return labels


def monthly_trend(
    products: Sequence[ProductRecord],
    month_columns: Sequence[str],
    selected: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Per month: total over all products, or one column per selected product.

    Values are read by column position so duplicate month names stay apart.
    """
    rows = []
    for position, month in enumerate(month_labels(month_columns)):
        point = {"month": month}
        if not selected:
            point["Total Semua Produk"] = sum(p.value_at(position) for p in products)
        else:
            for name in selected:
                product = next((p for p in products if p.nama_barang == name), None)
                if product is not None:
                    point[name] = product.value_at(position)
        rows.append(point)
    return pd.DataFrame(rows)


def forecast_vs_actual(products: Sequence[ProductRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "name": p.nama_barang[:30],
                "Forecast 3 Bulan": p.forecast3,
                "Rata-rata Perbulan": p.rata_rata_kebutuhan,
                "Stok Saat Ini": p.stok_accurate,
            }
            for p in products
        ],
        columns=["name", "Forecast 3 Bulan", "Rata-rata Perbulan", "Stok Saat Ini"],
    )


def order_analysis(products: Sequence[ProductRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "name": p.nama_barang[:30],
                "Rekomendasi Order": p.rekomendasi_order,
                "Stok Saat Ini": p.stok_accurate,
                "Minimum Stok": p.minimum_stok,
            }
            for p in products
        ],
        columns=["name", "Rekomendasi Order", "Stok Saat Ini", "Minimum Stok"],
    )


def seasonal_index_top(products: Sequence[ProductRecord], count: int = SEASONAL_TOP_COUNT) -> pd.DataFrame:
    # forecast dibagi 100 supaya satu skala dengan indeks musiman di radar
    top = get_top_products(products, count, metric="indeks_musiman")
    return pd.DataFrame(
        [
            {
                "product": p.nama_barang[:20],
                "Indeks Musiman": p.indeks_musiman,
                "Forecast": p.forecast3 / 100,
            }
            for p in top
        ],
        columns=["product", "Indeks Musiman", "Forecast"],
    )


def stock_demand_points(products: Sequence[ProductRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "name": p.nama_barang,
                "stok": p.stok_accurate,
                "demand": p.rata_rata_kebutuhan,
                "rekomendasi": p.rekomendasi_order,
            }
            for p in products
        ],
        columns=["name", "stok", "demand", "rekomendasi"],
    )


# ------------------------
# Summary cards
# ------------------------

def build_summary_cards(summary: AnalysisSummary, products: Sequence[ProductRecord]) -> List[SummaryCard]:
    n = SUMMARY_DETAIL_COUNT
    need_order = get_products_needing_order(products)
    high_risk = get_high_risk_products(products)
    overload = get_overloaded_products(products)
    top_rec = get_top_products(products, n, metric="rekomendasi_order")
    top_fc = get_top_products(products, n, metric="forecast3")

    def names(items: Sequence[ProductRecord]) -> List[str]:
        return [p.nama_barang for p in items[:n]]

    def footnote(shown: int, total: int) -> Optional[str]:
        return f"Menampilkan {shown} dari {total} item" if shown == n else None

    return [
        SummaryCard(
            "total", "Total Produk", str(summary.total_products), "📦",
            "Sample Produk (5 pertama)", names(products),
            footnote(min(len(products), n), summary.total_products),
        ),
        SummaryCard(
            "needOrder", "Perlu Order", str(summary.products_need_ordering), "🔁",
            "Produk yang Perlu Order", names(need_order),
            footnote(min(len(need_order), n), summary.products_need_ordering),
        ),
        SummaryCard(
            "totalRec", "Total Rekomendasi Order", format_number(summary.total_order_recommendations), "📊",
            "Top 5 Rekomendasi Tertinggi",
            [f"{p.nama_barang[:30]}: {format_number(p.rekomendasi_order)}" for p in top_rec],
        ),
        SummaryCard(
            "avgForecast", "Rata-rata Forecast (3 Bulan)", format_number(summary.average_forecast), "📈",
            "Top 5 Forecast Tertinggi",
            [f"{p.nama_barang[:30]}: {format_number(p.forecast3)}" for p in top_fc],
        ),
        SummaryCard(
            "highRisk", "Produk Risiko Tinggi", str(summary.high_risk_products), "⚠️",
            "Produk Risiko Tinggi", names(high_risk),
            footnote(min(len(high_risk), n), summary.high_risk_products),
        ),
        SummaryCard(
            "overload", "Gudang Overload", str(summary.warehouse_overload), "🏭",
            "Produk Overload di Gudang", names(overload),
            footnote(min(len(overload), n), summary.warehouse_overload),
        ),
    ]
