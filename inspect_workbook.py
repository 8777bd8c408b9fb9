"""
Script untuk check file Excel sebelum di-upload ke dashboard
Menampilkan kolom bulan yang terdeteksi, bulan forecast, ringkasan dan peringatan

Usage:
    python inspect_workbook.py data_pembelian.xlsx --top 10
"""

import argparse
import sys
from pathlib import Path

from utils.analysis import (
    RANKING_METRICS,
    calculate_summary,
    format_number,
    get_risk_distribution,
    get_top_products,
)
from utils.data_handler import parse_and_check
from utils.exceptions import ParseError
from utils.logging_setup import configure_logging


def inspect_workbook(file_path: str, top: int = 10, metric: str = "total_qty_out") -> int:
    """Print the parse result of one workbook; returns a process exit code."""
    if not Path(file_path).exists():
        print(f"❌ File tidak ditemukan: {file_path}")
        return 1

    print(f"\n{'='*80}")
    print(f"CHECKING EXCEL FILE: {file_path}")
    print(f"{'='*80}\n")

    try:
        result = parse_and_check(file_path)
    except ParseError as e:
        print(f"❌ {e}")
        return 1

    print(f"📅 Kolom bulan ({len(result.month_columns)}): {', '.join(result.month_columns)}")
    print(f"🔮 Bulan forecast: {result.forecast_month}")
    print(f"📦 Total produk: {result.total_products}")

    if result.warnings:
        print("\n⚠️ Peringatan:")
        for message in result.warnings:
            print(f"   - {message}")

    summary = calculate_summary(result.products)
    print(f"\n{'='*80}")
    print("RINGKASAN:")
    print(f"{'='*80}")
    print(f"   Total rekomendasi order : {format_number(summary.total_order_recommendations)}")
    print(f"   Perlu order             : {summary.products_need_ordering}")
    print(f"   Rata-rata forecast (3B) : {format_number(summary.average_forecast)}")
    print(f"   Risiko tinggi           : {summary.high_risk_products}")
    print(f"   Gudang overload         : {summary.warehouse_overload}")
    for s in get_risk_distribution(result.products):
        print(f"   Risiko {s.name:<17}: {s.value}")

    print(f"\n{'='*80}")
    print(f"TOP {top} BERDASARKAN {metric}:")
    print(f"{'='*80}")
    for i, p in enumerate(get_top_products(result.products, top, metric=metric), 1):
        print(f"   {i:>2}. {p.nama_barang[:50]:<50} {format_number(getattr(p, metric))}")
    print(f"\n{'='*80}\n")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Cek struktur file Excel untuk dashboard forecasting")
    parser.add_argument("file_path", help="Path Excel input (.xlsx)")
    parser.add_argument("--top", type=int, default=10, help="Jumlah produk teratas yang ditampilkan")
    parser.add_argument("--metric", default="total_qty_out", choices=RANKING_METRICS, help="Metrik ranking")
    parser.add_argument("--log-level", default=None, help="Level logging (DEBUG, INFO, WARNING)")
    args = parser.parse_args(argv)

    configure_logging(args.log_level.upper() if args.log_level else "WARNING")
    return inspect_workbook(args.file_path, top=args.top, metric=args.metric)


if __name__ == "__main__":
    sys.exit(main())
