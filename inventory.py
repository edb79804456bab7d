import logging

import pandas as pd

from store import COLLECTION, StoreError

logger = logging.getLogger(__name__)

FIELDS = ("name", "sku", "weight", "karat", "cost", "tagPrice", "notes")


def draft_key(field):
    return f"draft_{field}"


# --- Form state ---
def init_state(state):
    """Install session defaults.

    Draft and search values are re-assigned on every run so Streamlit keeps
    them while the inventory panel (and its widgets) is not rendered.
    """
    for field in FIELDS:
        key = draft_key(field)
        state[key] = state.get(key, "")
    state["search"] = state.get("search", "")
    if "editing_id" not in state:
        state["editing_id"] = None
    if "inventory_list" not in state:
        state["inventory_list"] = []
    if "tab" not in state:
        state["tab"] = "inventory"


def get_draft(state):
    return {field: state.get(draft_key(field), "") for field in FIELDS}


def set_field(state, name, value):
    if name not in FIELDS:
        raise KeyError(name)
    state[draft_key(name)] = value


def start_edit(state, item):
    for field in FIELDS:
        state[draft_key(field)] = item.get(field, "")
    state["editing_id"] = item["id"]


def reset(state):
    for field in FIELDS:
        state[draft_key(field)] = ""
    state["editing_id"] = None


# --- Store calls ---
def refresh(state, store):
    try:
        records = store.list_records(COLLECTION)
    except StoreError:
        logger.exception("Error fetching inventory")
        return False
    state["inventory_list"] = [{"id": record_id, **data} for record_id, data in records]
    return True


def ensure_loaded(state, store):
    # one fetch per session, even if it fails
    if not state.get("fetched"):
        state["fetched"] = True
        refresh(state, store)


def save(state, store):
    draft = get_draft(state)
    editing_id = state.get("editing_id")
    try:
        if editing_id:
            store.update_record(COLLECTION, editing_id, draft)
            state["editing_id"] = None
        else:
            store.create_record(COLLECTION, draft)
    except StoreError:
        logger.exception("Error saving item")
        return False
    refresh(state, store)
    reset(state)
    return True


def delete(state, store, record_id):
    try:
        store.delete_record(COLLECTION, record_id)
    except StoreError:
        logger.exception("Error deleting item %s", record_id)
        return False
    refresh(state, store)
    return True


# --- Listing ---
def filter_items(items, search):
    needle = search.lower()
    return [
        item for item in items
        if needle in item["name"].lower() or needle in item["sku"].lower()
    ]


def format_row(item):
    return [
        item.get("name", ""),
        item.get("sku", ""),
        item.get("weight", ""),
        item.get("karat", ""),
        f"${item.get('cost', '')}",
        f"${item.get('tagPrice', '')}",
    ]


def to_frame(items):
    return pd.DataFrame(items, columns=["id", *FIELDS])
