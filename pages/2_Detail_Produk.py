import streamlit as st

from config.settings import ITEMS_PER_PAGE
from utils.data_handler import (
    STATUS_FILTERS,
    filter_products,
    init_session_state,
    paginate,
    products_to_frame,
)

st.set_page_config(page_title="Detail Produk", page_icon="📋", layout="wide")
st.title("📋 Detail Data Produk")

init_session_state(st.session_state)
result = st.session_state["parse_result"]
if result is None:
    st.warning("⚠️ Belum ada data. Silakan upload file Excel di halaman utama.")
    st.stop()

c1, c2 = st.columns([3, 1])
with c1:
    search = st.text_input("Cari nama produk...", key="detail_search")
with c2:
    status = st.selectbox(
        "Status",
        options=list(STATUS_FILTERS),
        format_func=STATUS_FILTERS.get,
        key="detail_status",
    )

filtered = filter_products(result.products, search, status)

# Kembali ke halaman 1 setiap filter berubah
filter_sig = (search, status, id(result))
if st.session_state.get("detail_filter_sig") != filter_sig:
    st.session_state["detail_filter_sig"] = filter_sig
    st.session_state["detail_page"] = 1

page = paginate(filtered, st.session_state["detail_page"], ITEMS_PER_PAGE)
st.caption(page.caption)

st.dataframe(
    products_to_frame(page.items),
    use_container_width=True,
    hide_index=True,
    column_config={
        "Total Qty": st.column_config.NumberColumn(format="%d"),
        "Stok": st.column_config.NumberColumn(format="%d"),
        "Forecast": st.column_config.NumberColumn(format="%d"),
        "Rekomendasi": st.column_config.NumberColumn(format="%d"),
    },
)

if page.total_pages > 1:
    p1, p2, p3 = st.columns([1, 2, 1])
    with p1:
        if st.button("Previous", disabled=page.page == 1, use_container_width=True):
            st.session_state["detail_page"] = page.page - 1
            st.rerun()
    with p2:
        st.markdown(f"<div style='text-align:center'>Halaman {page.page} dari {page.total_pages}</div>",
                    unsafe_allow_html=True)
    with p3:
        if st.button("Next", disabled=page.page == page.total_pages, use_container_width=True):
            st.session_state["detail_page"] = page.page + 1
            st.rerun()
