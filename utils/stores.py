"""CheapShark store ids supported by the tracker"""

from typing import Any

STEAM_STORE_ID = "1"
GOG_STORE_ID = "7"
UNKNOWN_STORE = "Unknown Store"

STORE_NAMES = {
    STEAM_STORE_ID: "Steam",
    GOG_STORE_ID: "GOG",
}

SUPPORTED_STORE_IDS = frozenset(STORE_NAMES)


def store_name_for(store_id: Any) -> str:
    """Return the store name for a CheapShark store id, or 'Unknown Store'"""
    return STORE_NAMES.get(str(store_id), UNKNOWN_STORE)
