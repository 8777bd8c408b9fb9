"""Typed records shared by the parser, the aggregator and the Streamlit pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class RiskCategory(str, Enum):
    NORMAL = "normal"
    HIGH = "tinggi"


class OrderDecision(str, Enum):
    NEEDS_ORDER = "order"
    NO_ORDER = "noorder"
    UNSPECIFIED = "unspecified"


class WarehouseStatus(str, Enum):
    SAFE = "aman"
    OVERLOAD = "overload"


@dataclass(frozen=True)
class MonthColumn:
    """A header cell recognised as a month."""

    col_index: int
    month_index: int
    name: str


@dataclass(frozen=True)
class ProductRecord:
    """One data row of the uploaded sheet."""

    nama_barang: str
    monthly_values: Tuple[Tuple[str, float], ...]
    month_columns: Tuple[str, ...]
    legacy_months: Tuple[float, ...] = ()

    total_qty_out: float = 0
    rumus_bantuan: float = 0
    order: float = 0
    rekomendasi_order: float = 0
    stok_accurate: float = 0
    pendingan: float = 0
    tanggal_eta: str = ""
    eta: float = 0
    rata_rata_kebutuhan: float = 0
    forecast3: float = 0
    indeks_musiman: float = 0
    kapasitas_gudang: float = 0
    status_gudang: str = ""
    minimum_stok: float = 0
    kategori_risiko: str = ""
    order_otomatis: float = 0
    order_tidak_order: str = ""
    meeting: str = ""
    kubikasi: float = 0

    risk: RiskCategory = RiskCategory.NORMAL
    order_decision: OrderDecision = OrderDecision.UNSPECIFIED
    warehouse_status: WarehouseStatus = WarehouseStatus.SAFE
    # "Tidak" or "❗" in the order label; "❗ Tidak Order" also counts as needing an order
    marked_no_order: bool = False

    @property
    def monthly_data(self) -> Dict[str, float]:
        """Month name to value; with duplicate month columns the last one wins."""
        return dict(self.monthly_values)

    def value_at(self, position: int) -> float:
        """Value of the n-th detected month column."""
        if 0 <= position < len(self.monthly_values):
            return self.monthly_values[position][1]
        return 0

    @property
    def needs_order(self) -> bool:
        return self.order_decision is OrderDecision.NEEDS_ORDER

    @property
    def is_high_risk(self) -> bool:
        return self.risk is RiskCategory.HIGH

    @property
    def is_overloaded(self) -> bool:
        return self.warehouse_status is WarehouseStatus.OVERLOAD


@dataclass(frozen=True)
class ParseResult:
    """Output of one parse; replaced wholesale by the next upload."""

    products: Tuple[ProductRecord, ...]
    month_columns: Tuple[str, ...]
    forecast_month: str
    warnings: Tuple[str, ...] = ()

    @property
    def total_products(self) -> int:
        return len(self.products)

    @property
    def period_label(self) -> str:
        if not self.month_columns:
            return "-"
        return f"{self.month_columns[0]} - {self.month_columns[-1]}"


@dataclass(frozen=True)
class AnalysisSummary:
    total_products: int
    total_order_recommendations: float
    products_need_ordering: int
    average_forecast: int
    high_risk_products: int
    warehouse_overload: int


@dataclass(frozen=True)
class DistributionSlice:
    name: str
    value: int
    color: str


@dataclass(frozen=True)
class SummaryCard:
    id: str
    title: str
    value: str
    icon: str
    detail_title: str
    details: List[str] = field(default_factory=list)
    footnote: Optional[str] = None
