# main.py
import streamlit as st

import inventory
import shared_utils as su
from store import open_store

st.set_page_config(page_title="Jewelry Admin", page_icon="💎", layout="wide")

NAV_ITEMS = [
    ("inventory", "Inventory", "📦"),
    ("sales", "Sales", None),
    ("customers", "Customers", None),
    ("dashboard", "Dashboard", None),
]

# field, placeholder; laid out row by row across two columns
FORM_INPUTS = [
    ("name", "Item Name"),
    ("sku", "Item ID / SKU"),
    ("weight", "Weight (grams)"),
    ("karat", "Karat"),
    ("cost", "Purchase Cost ($)"),
    ("tagPrice", "Tag Price ($)"),
]

TABLE_HEADERS = ["Item", "SKU", "Weight", "Karat", "Cost", "Tag Price", "Actions", ""]
COLUMN_WIDTHS = [3, 2, 1, 1, 1, 1, 1, 1]


@st.cache_resource
def load_store():
    settings = su.load_settings_yaml()
    su.configure_logging(settings)
    return open_store(settings["store"])


def select_tab(key):
    st.session_state.tab = key


# -----------------------------
# Session state + store
# -----------------------------
inventory.init_state(st.session_state)
if "store" not in st.session_state:
    st.session_state.store = load_store()
store = st.session_state.store
inventory.ensure_loaded(st.session_state, store)

# -----------------------------
# Sidebar navigation
# -----------------------------
st.sidebar.title("💎 Jewelry Admin")
for key, label, icon in NAV_ITEMS:
    st.sidebar.button(
        label, key=f"nav_{key}", icon=icon,
        type="primary" if st.session_state.tab == key else "secondary",
        on_click=select_tab, args=(key,),
    )

# -----------------------------
# Inventory panel
# -----------------------------
if st.session_state.tab == "inventory":
    editing = bool(st.session_state.editing_id)
    st.subheader("Edit Inventory Item" if editing else "Add Inventory Item")
    st.caption("Use the form below to manage your product listings.")

    form_cols = st.columns(2)
    for i, (field, placeholder) in enumerate(FORM_INPUTS):
        form_cols[i % 2].text_input(
            placeholder, key=inventory.draft_key(field),
            placeholder=placeholder, label_visibility="collapsed",
        )
    st.text_area(
        "Notes / Description", key=inventory.draft_key("notes"),
        placeholder="Notes / Description", label_visibility="collapsed",
    )

    action_col, search_col = st.columns(2)
    action_col.button(
        "Update Item" if editing else "Add to Inventory",
        key="save", type="primary",
        on_click=inventory.save, args=(st.session_state, store),
    )
    search_col.text_input(
        "Search", key="search",
        placeholder="Search by name or SKU...", label_visibility="collapsed",
    )

    # --- Table ---
    rows = inventory.filter_items(st.session_state.inventory_list, st.session_state.search)

    header = st.columns(COLUMN_WIDTHS)
    for col, title in zip(header, TABLE_HEADERS):
        if title:
            col.markdown(f"**{title}**")

    for item in rows:
        cells = st.columns(COLUMN_WIDTHS)
        for col, value in zip(cells, inventory.format_row(item)):
            col.text(value)
        cells[6].button(
            "✏️", key=f"edit_{item['id']}",
            on_click=inventory.start_edit, args=(st.session_state, item),
        )
        cells[7].button(
            "🗑", key=f"delete_{item['id']}",
            on_click=inventory.delete, args=(st.session_state, store, item["id"]),
        )

    if rows:
        csv = inventory.to_frame(rows).to_csv(index=False).encode("utf-8")
        st.download_button("⬇️ Download CSV", csv, "inventory.csv", mime="text/csv")
