import streamlit as st

from config.settings import MAX_SELECTED_PRODUCTS
from utils.analysis import (
    forecast_vs_actual,
    get_order_status_distribution,
    get_risk_distribution,
    get_warehouse_distribution,
    monthly_trend,
    order_analysis,
    seasonal_index_top,
    select_display_products,
    stock_demand_points,
)
from utils.chart_generator import (
    generate_distribution_pie,
    generate_forecast_vs_actual_chart,
    generate_monthly_trend_chart,
    generate_order_analysis_chart,
    generate_seasonal_radar_chart,
    generate_stock_demand_scatter,
    generate_top_products_chart,
)
from utils.data_handler import init_session_state

st.set_page_config(page_title="Grafik Analisis", page_icon="📈", layout="wide")
st.title("📈 Grafik Analisis")

init_session_state(st.session_state)
result = st.session_state["parse_result"]
if result is None:
    st.warning("⚠️ Belum ada data. Silakan upload file Excel di halaman utama.")
    st.stop()

products = result.products
st.caption(f"Forecasting untuk Bulan {result.forecast_month} • data {result.period_label}")

selected = st.multiselect(
    "Pilih produk untuk dibandingkan (maks. 5)",
    options=[p.nama_barang for p in products],
    max_selections=MAX_SELECTED_PRODUCTS,
    placeholder="Cari nama produk...",
    help="Kosongkan untuk melihat total semua produk dan Top 10 produk terlaris.",
)

# Trend bulanan
trend = monthly_trend(products, result.month_columns, selected)
st.plotly_chart(generate_monthly_trend_chart(trend, result.forecast_month), use_container_width=True)

display = select_display_products(products, selected)

c1, c2 = st.columns([3, 2])
with c1:
    st.plotly_chart(generate_top_products_chart(display, selected=bool(selected)), use_container_width=True)
with c2:
    st.plotly_chart(
        generate_distribution_pie(get_risk_distribution(products), "Distribusi Kategori Risiko"),
        use_container_width=True,
    )

st.plotly_chart(generate_forecast_vs_actual_chart(forecast_vs_actual(display)), use_container_width=True)
st.plotly_chart(generate_order_analysis_chart(order_analysis(display)), use_container_width=True)

c3, c4 = st.columns(2)
with c3:
    st.plotly_chart(
        generate_distribution_pie(get_warehouse_distribution(products), "Status Kapasitas Gudang"),
        use_container_width=True,
    )
with c4:
    st.plotly_chart(
        generate_distribution_pie(get_order_status_distribution(products), "Distribusi Status Order"),
        use_container_width=True,
    )

c5, c6 = st.columns(2)
with c5:
    st.plotly_chart(generate_seasonal_radar_chart(seasonal_index_top(products)), use_container_width=True)
with c6:
    st.plotly_chart(generate_stock_demand_scatter(stock_demand_points(products)), use_container_width=True)
