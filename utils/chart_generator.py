from __future__ import annotations
from typing import List, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
import plotly.express as px

from config.settings import SERIES_COLORS
from utils.models import DistributionSlice, ProductRecord

PRIMARY_COLOR = "#2563eb"  # blue-600
SUCCESS_COLOR = "#16a34a"  # green-600
WARNING_COLOR = "#ca8a04"  # yellow-600
DANGER_COLOR = "#dc2626"   # red-600
MUTED_COLOR = "#64748b"    # slate-500
PURPLE_COLOR = "#8b5cf6"


def customize_chart_layout(fig: go.Figure, title: Optional[str] = None) -> go.Figure:
    fig.update_layout(
        title=title,
        template="plotly_white",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        margin=dict(l=10, r=10, t=50, b=10),
        font=dict(family="Inter, Segoe UI, Arial", size=12),
        xaxis=dict(showgrid=True, gridcolor="#f1f5f9"),
        yaxis=dict(showgrid=True, gridcolor="#f1f5f9"),
    )
    return fig


def generate_monthly_trend_chart(trend: pd.DataFrame, forecast_month: str) -> go.Figure:
    # Expect columns: month, then one column per series
    fig = go.Figure()
    series = [c for c in trend.columns if c != "month"]
    for i, name in enumerate(series):
        fig.add_trace(go.Scatter(
            x=trend["month"],
            y=trend[name],
            mode="lines+markers",
            name=name,
            line=dict(color=SERIES_COLORS[i % len(SERIES_COLORS)], width=2),
            hovertemplate="Bulan: %{x}<br>Qty: %{y:,.0f}<extra>" + name + "</extra>",
        ))
    fig = customize_chart_layout(fig, title=f"Trend Penjualan Bulanan (forecast: {forecast_month})")
    fig.update_xaxes(title_text="Bulan", categoryorder="array", categoryarray=list(trend["month"]))
    fig.update_yaxes(title_text="Qty")
    return fig


def generate_top_products_chart(products: Sequence[ProductRecord], selected: bool = False) -> go.Figure:
    df = pd.DataFrame(
        [{"product": p.nama_barang, "Total Terjual": p.total_qty_out} for p in products],
        columns=["product", "Total Terjual"],
    )
    fig = px.bar(
        df,
        x="Total Terjual",
        y="product",
        orientation="h",
        color_discrete_sequence=[PURPLE_COLOR],
    )
    fig.update_traces(hovertemplate="Produk: %{y}<br>Total Terjual: %{x:,.0f}<extra></extra>")
    title = "Produk Terpilih - Total Terjual" if selected else "Top 10 Produk Terlaris"
    fig = customize_chart_layout(fig, title=title)
    fig.update_layout(hovermode="closest")
    fig.update_yaxes(title_text="Produk", autorange="reversed")
    fig.update_xaxes(title_text="Total Terjual")
    return fig


def generate_distribution_pie(slices: List[DistributionSlice], title: str) -> go.Figure:
    fig = go.Figure(go.Pie(
        labels=[s.name for s in slices],
        values=[s.value for s in slices],
        marker=dict(colors=[s.color for s in slices]),
        hole=0.35,
        textinfo="label+percent",
        hovertemplate="%{label}: %{value}<extra></extra>",
    ))
    return customize_chart_layout(fig, title=title)


def _grouped_bars(df: pd.DataFrame, bar_cols, colors, title: str, line_col: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    for col, color in zip(bar_cols, colors):
        fig.add_trace(go.Bar(x=df["name"], y=df[col], name=col, marker_color=color))
    if line_col:
        fig.add_trace(go.Scatter(
            x=df["name"], y=df[line_col], name=line_col, mode="lines+markers",
            line=dict(color=WARNING_COLOR, width=2),
        ))
    fig = customize_chart_layout(fig, title=title)
    fig.update_layout(barmode="group")
    fig.update_xaxes(tickangle=-45)
    return fig


def generate_forecast_vs_actual_chart(df: pd.DataFrame) -> go.Figure:
    return _grouped_bars(
        df,
        ["Forecast 3 Bulan", "Stok Saat Ini"],
        ["#3b82f6", "#10b981"],
        "Forecast vs Stok Saat Ini",
        line_col="Rata-rata Perbulan",
    )


def generate_order_analysis_chart(df: pd.DataFrame) -> go.Figure:
    return _grouped_bars(
        df,
        ["Rekomendasi Order", "Stok Saat Ini", "Minimum Stok"],
        ["#f59e0b", "#06b6d4", "#ec4899"],
        "Analisis Rekomendasi Order",
    )


def generate_seasonal_radar_chart(df: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    for col, color in (("Indeks Musiman", PURPLE_COLOR), ("Forecast", PRIMARY_COLOR)):
        fig.add_trace(go.Scatterpolar(
            r=df[col],
            theta=df["product"],
            fill="toself",
            name=col,
            line=dict(color=color),
        ))
    fig = customize_chart_layout(fig, title="Indeks Musiman (Top 8)")
    fig.update_layout(polar=dict(radialaxis=dict(visible=True)), hovermode="closest")
    return fig


def generate_stock_demand_scatter(df: pd.DataFrame) -> go.Figure:
    fig = px.scatter(
        df,
        x="stok",
        y="demand",
        size=df["rekomendasi"].clip(lower=0) + 1,
        hover_name="name",
        color_discrete_sequence=[PRIMARY_COLOR],
    )
    fig.update_traces(
        hovertemplate="%{hovertext}<br>Stok: %{x:,.0f}<br>Kebutuhan/bulan: %{y:,.0f}<extra></extra>",
    )
    fig = customize_chart_layout(fig, title="Stok vs Kebutuhan Bulanan")
    fig.update_layout(hovermode="closest")
    fig.update_xaxes(title_text="Stok Saat Ini")
    fig.update_yaxes(title_text="Rata-rata Kebutuhan per Bulan")
    return fig
