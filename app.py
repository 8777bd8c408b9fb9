import streamlit as st

from config.settings import ASSETS_FOLDER
from utils.analysis import build_summary_cards
from utils.data_handler import (
    apply_outcome,
    init_session_state,
    load_parsed_workbook,
    process_upload,
    reset_state,
)
from utils.logging_setup import configure_logging
from utils.validators import validate_upload

st.set_page_config(page_title="Sistem Forecasting Pembelian", page_icon="📊", layout="wide")
configure_logging()

# Inject CSS
css_path = ASSETS_FOLDER / "styles.css"
if css_path.exists():
    st.markdown(f"<style>{css_path.read_text(encoding='utf-8')}</style>", unsafe_allow_html=True)

ss = st.session_state
init_session_state(ss)

head1, head2 = st.columns([4, 1])
with head1:
    st.title("📊 Sistem Forecasting Pembelian")
    st.caption("Analisis data penjualan & rekomendasi order dari file Excel")
with head2:
    if ss["parse_result"] is not None or ss["upload_error"]:
        if st.button("🔄 Upload File Baru", use_container_width=True):
            reset_state(ss)
            st.rerun()

uploaded = st.file_uploader(
    "Tarik & letakkan file Excel di sini",
    type=["xlsx"],
    accept_multiple_files=False,
    help="Format: .xlsx",
    key=f"uploader_{ss['uploader_key']}",
)

if uploaded is not None:
    signature = uploaded.file_id
    if ss["last_upload"] != signature:
        ss["last_upload"] = signature
        problem = validate_upload(uploaded.name, uploaded.type, uploaded.size)
        if problem:
            reset_state(ss)
            ss["upload_error"] = problem
            st.rerun()
        with st.spinner("Memproses file Excel..."):
            outcome = process_upload(uploaded.getvalue(), parser=load_parsed_workbook)
        apply_outcome(ss, outcome)

if ss["upload_error"]:
    st.error(f"❌ {ss['upload_error']}")

result = ss["parse_result"]
summary = ss["summary"]

if result is None:
    with st.expander("Lihat Instruksi", expanded=True):
        st.markdown(
            "- Siapkan file Excel (.xlsx) dengan format sesuai template\n"
            "- Baris pertama adalah header; kolom bulan dikenali dari namanya (Jan, Februari, Maret, ...)\n"
            "- Kolom pertama berisi Nama Barang; baris tanpa nama dilewati\n"
            "- Hanya sheet pertama yang dibaca"
        )
    st.stop()

# Forecast banner
b1, b2 = st.columns([3, 1])
with b1:
    st.subheader(f"🔮 Forecasting untuk Bulan {result.forecast_month}")
    st.caption(f"Berdasarkan data penjualan dari {result.period_label}")
with b2:
    st.metric("Periode Data", f"{len(result.month_columns)} Bulan")

for message in result.warnings:
    st.warning(f"⚠️ {message}")

# Summary cards
cards = build_summary_cards(summary, result.products)
for row_start in range(0, len(cards), 3):
    cols = st.columns(3)
    for col, card in zip(cols, cards[row_start:row_start + 3]):
        detail = "\n".join(f"{i}. {item}" for i, item in enumerate(card.details, 1))
        if card.footnote:
            detail += f"\n\n{card.footnote}"
        with col:
            st.metric(
                f"{card.icon} {card.title}",
                card.value,
                help=f"**{card.detail_title}**\n\n{detail}" if card.details else None,
            )

st.divider()
st.info("Gunakan sidebar untuk membuka halaman Grafik Analisis dan Detail Produk.")
c1, c2 = st.columns(2)
with c1:
    if st.button("📈 Grafik Analisis", use_container_width=True):
        st.switch_page("pages/1_Grafik_Analisis.py")
with c2:
    if st.button("📋 Detail Data Produk", use_container_width=True):
        st.switch_page("pages/2_Detail_Produk.py")
