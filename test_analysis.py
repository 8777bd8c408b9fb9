"""
Test untuk agregasi: ringkasan, ranking Top-N, distribusi status, dan data grafik
"""

import pytest

from utils.analysis import (
    build_summary_cards,
    calculate_summary,
    format_number,
    get_order_status_distribution,
    get_risk_distribution,
    get_top_products,
    get_warehouse_distribution,
    month_labels,
    monthly_trend,
    round_half_up,
    seasonal_index_top,
    select_display_products,
)
from utils.chart_generator import generate_monthly_trend_chart


def test_summary_counts_and_sums(make_product):
    products = [
        make_product("A", rekomendasi_order=10, forecast3=10, order_tidak_order="🔁 Order",
                     kategori_risiko="Risiko tinggi", status_gudang="⚠️ Overload"),
        make_product("B", rekomendasi_order=5, forecast3=11, order_tidak_order="❗ Tidak",
                     kategori_risiko="Normal", status_gudang="Aman"),
        make_product("C", rekomendasi_order=0, forecast3=0, kategori_risiko="🔝"),
    ]
    summary = calculate_summary(products)
    assert summary.total_products == 3
    assert summary.total_order_recommendations == 15
    assert summary.products_need_ordering == 1
    assert summary.high_risk_products == 2
    assert summary.warehouse_overload == 1
    assert summary.average_forecast == 7  # 21 / 3


def test_average_forecast_rounds_true_mean_half_up(make_product):
    products = [make_product("A", forecast3=1), make_product("B", forecast3=2)]
    assert calculate_summary(products).average_forecast == 2
    products = [make_product("A", forecast3=2), make_product("B", forecast3=3)]
    assert calculate_summary(products).average_forecast == 3


def test_summary_of_empty_list_is_zero():
    summary = calculate_summary([])
    assert summary.total_products == 0
    assert summary.average_forecast == 0
    assert summary.total_order_recommendations == 0


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_top_products_is_stable_and_truncated(make_product):
    products = [
        make_product("A", total_qty_out=5),
        make_product("B", total_qty_out=9),
        make_product("C", total_qty_out=5),
        make_product("D", total_qty_out=9),
        make_product("E", total_qty_out=1),
    ]
    top = get_top_products(products, 4)
    assert [p.nama_barang for p in top] == ["B", "D", "A", "C"]
    assert get_top_products(products, 0) == []


def test_top_products_by_other_metric(make_product):
    products = [make_product("A", forecast3=1), make_product("B", forecast3=3)]
    assert [p.nama_barang for p in get_top_products(products, 10, metric="forecast3")] == ["B", "A"]


def test_top_products_rejects_unknown_metric(make_product):
    with pytest.raises(ValueError):
        get_top_products([make_product("A")], 5, metric="nama_barang")


def test_distributions(make_product):
    products = [
        make_product("A", kategori_risiko="tinggi", status_gudang="Overload", order_tidak_order="Order"),
        make_product("B"),
        make_product("C"),
    ]
    assert [(s.name, s.value) for s in get_risk_distribution(products)] == [("Normal", 2), ("Tinggi", 1)]
    assert [(s.name, s.value) for s in get_warehouse_distribution(products)] == [("Aman", 2), ("Overload", 1)]
    assert [(s.name, s.value) for s in get_order_status_distribution(products)] == [
        ("Perlu Order", 1), ("Tidak Perlu Order", 2),
    ]


def test_risk_label_match_is_case_sensitive(make_product):
    # "Tinggi" (kapital) tidak cocok dengan penanda lama "tinggi"
    products = [make_product("A", kategori_risiko="Risiko Tinggi")]
    assert calculate_summary(products).high_risk_products == 0


def test_monthly_trend_total_and_selected(make_product):
    months = (("Januari", 1), ("Februari", 2))
    products = [
        make_product("A", months=months),
        make_product("B", months=(("Januari", 10), ("Februari", 20))),
    ]
    total = monthly_trend(products, ["Januari", "Februari"])
    assert list(total["Total Semua Produk"]) == [11, 22]

    picked = monthly_trend(products, ["Januari", "Februari"], ["B", "tidak ada"])
    assert list(picked.columns) == ["month", "B"]
    assert list(picked["B"]) == [10, 20]


def test_monthly_trend_keeps_duplicate_months_apart(make_product):
    p = make_product("A", months=(("Januari", 4), ("Januari", 6)))
    trend = monthly_trend([p], ["Januari", "Januari"])
    assert list(trend["Total Semua Produk"]) == [4, 6]
    assert list(trend["month"]) == ["Januari", "Januari (2)"]

    fig = generate_monthly_trend_chart(trend, "Februari")
    assert list(fig.data[0].x) == ["Januari", "Januari (2)"]
    assert list(fig.data[0].y) == [4, 6]


def test_month_labels_number_repeats_by_position():
    assert month_labels(["Januari", "Februari", "Januari", "Januari"]) == [
        "Januari", "Februari", "Januari (2)", "Januari (3)",
    ]


def test_select_display_products(make_product):
    products = [make_product(str(i), total_qty_out=i) for i in range(12)]
    assert len(select_display_products(products, None)) == 10
    picked = select_display_products(products, ["5", "2"])
    assert [p.nama_barang for p in picked] == ["2", "5"]


def test_seasonal_index_top(make_product):
    products = [
        make_product("X" * 25, indeks_musiman=2.0, forecast3=300),
        make_product("Y", indeks_musiman=1.0, forecast3=100),
    ]
    df = seasonal_index_top(products, 1)
    assert list(df["product"]) == ["X" * 20]
    assert list(df["Forecast"]) == [3.0]


def test_summary_cards(make_product):
    products = [make_product(f"P{i}", order_tidak_order="🔁", rekomendasi_order=i) for i in range(7)]
    cards = build_summary_cards(calculate_summary(products), products)
    by_id = {c.id: c for c in cards}
    assert [c.id for c in cards] == ["total", "needOrder", "totalRec", "avgForecast", "highRisk", "overload"]
    assert by_id["total"].details == ["P0", "P1", "P2", "P3", "P4"]
    assert by_id["total"].footnote == "Menampilkan 5 dari 7 item"
    assert by_id["totalRec"].value == "21"
    assert by_id["totalRec"].details[0] == "P6: 6"
    assert by_id["highRisk"].details == []
    assert by_id["highRisk"].footnote is None


@pytest.mark.parametrize("value,expected", [
    (0, "0"), (12, "12"), (1234, "1.234"), (1234567.0, "1.234.567"), (1234.5, "1.234,5"), (0.25, "0,25"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected
