"""
Normalization of notice fields into canonical values.

- Category: mapped into a closed set of nine values; anything unknown
  becomes OTHERS, so the result is never null and never free text.
- State: synonyms and abbreviations map to canonical state names; blank
  means a central-government notice. Unrecognized non-blank values are kept
  (whitespace-collapsed) because state names are an open set across sources.
- Content hash: the deduplication key for a notice.
"""
import re
import hashlib
from typing import Optional, Tuple

from core.extraction_heuristics import normalize_title_for_display

CATEGORIES: Tuple[str, ...] = (
    'BANK', 'SSC', 'RAILWAYS', 'UPSC', 'PSU', 'STATE', 'DEFENCE', 'MEDICAL', 'OTHERS',
)
DEFAULT_CATEGORY = 'OTHERS'
DEFAULT_STATE = 'Central'

CATEGORY_SYNONYMS = {
    'bank': 'BANK',
    'banking': 'BANK',
    'ssc': 'SSC',
    'staff selection commission': 'SSC',
    'rrb': 'RAILWAYS',
    'rrc': 'RAILWAYS',
    'railway': 'RAILWAYS',
    'railways': 'RAILWAYS',
    'upsc': 'UPSC',
    'psu': 'PSU',
    'state': 'STATE',
    'state govt': 'STATE',
    'state government': 'STATE',
    'state psc': 'STATE',
    'defence': 'DEFENCE',
    'defense': 'DEFENCE',
    'medical': 'MEDICAL',
    'health': 'MEDICAL',
    'others': 'OTHERS',
    'other': 'OTHERS',
}

# Keys are lower-case; values are the canonical display names
STATE_SYNONYMS = {
    'central': 'Central',
    'centre': 'Central',
    'center': 'Central',
    'central govt': 'Central',
    'all india': 'Central',
    'andhra pradesh': 'Andhra Pradesh',
    'ap': 'Andhra Pradesh',
    'arunachal pradesh': 'Arunachal Pradesh',
    'assam': 'Assam',
    'bihar': 'Bihar',
    'br': 'Bihar',
    'chhattisgarh': 'Chhattisgarh',
    'cg': 'Chhattisgarh',
    'goa': 'Goa',
    'gujarat': 'Gujarat',
    'gj': 'Gujarat',
    'haryana': 'Haryana',
    'hr': 'Haryana',
    'himachal pradesh': 'Himachal Pradesh',
    'hp': 'Himachal Pradesh',
    'jharkhand': 'Jharkhand',
    'jh': 'Jharkhand',
    'karnataka': 'Karnataka',
    'ka': 'Karnataka',
    'kpsc': 'Karnataka',
    'kerala': 'Kerala',
    'kl': 'Kerala',
    'madhya pradesh': 'Madhya Pradesh',
    'mp': 'Madhya Pradesh',
    'mppsc': 'Madhya Pradesh',
    'maharashtra': 'Maharashtra',
    'mh': 'Maharashtra',
    'manipur': 'Manipur',
    'meghalaya': 'Meghalaya',
    'mizoram': 'Mizoram',
    'nagaland': 'Nagaland',
    'odisha': 'Odisha',
    'orissa': 'Odisha',
    'od': 'Odisha',
    'opsc': 'Odisha',
    'punjab': 'Punjab',
    'pb': 'Punjab',
    'rajasthan': 'Rajasthan',
    'rj': 'Rajasthan',
    'sikkim': 'Sikkim',
    'tamil nadu': 'Tamil Nadu',
    'tamilnadu': 'Tamil Nadu',
    'tn': 'Tamil Nadu',
    'tnpsc': 'Tamil Nadu',
    'telangana': 'Telangana',
    'ts': 'Telangana',
    'tripura': 'Tripura',
    'uttar pradesh': 'Uttar Pradesh',
    'up': 'Uttar Pradesh',
    'uttarakhand': 'Uttarakhand',
    'uk': 'Uttarakhand',
    'west bengal': 'West Bengal',
    'wb': 'West Bengal',
    'delhi': 'Delhi',
    'dl': 'Delhi',
    'nct': 'Delhi',
    'new delhi': 'Delhi',
    'jammu and kashmir': 'Jammu and Kashmir',
    'jammu & kashmir': 'Jammu and Kashmir',
    'j&k': 'Jammu and Kashmir',
    'ladakh': 'Ladakh',
    'puducherry': 'Puducherry',
    'pondicherry': 'Puducherry',
    'chandigarh': 'Chandigarh',
    'andaman and nicobar islands': 'Andaman and Nicobar Islands',
    'lakshadweep': 'Lakshadweep',
    'dadra and nagar haveli and daman and diu': 'Dadra and Nagar Haveli and Daman and Diu',
}


def _collapse(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def norm_category(category: Optional[str]) -> str:
    """
    Normalize a source category into the closed category set.

    Args:
        category: Raw category ("Banking", "rrb", "State Govt", None, ...)

    Returns:
        One of CATEGORIES; OTHERS for anything unrecognized
    """
    if not category or not isinstance(category, str):
        return DEFAULT_CATEGORY

    key = _collapse(category).lower()
    if key in CATEGORY_SYNONYMS:
        return CATEGORY_SYNONYMS[key]

    upper = key.upper()
    if upper in CATEGORIES:
        return upper
    return DEFAULT_CATEGORY


def norm_state(state: Optional[str]) -> str:
    """
    Normalize a state value.

    Blank or missing means "Central". Known names and abbreviations map to
    the canonical name in any case; other values pass through with
    whitespace collapsed.
    """
    if not state or not isinstance(state, str) or not state.strip():
        return DEFAULT_STATE

    collapsed = _collapse(state)
    return STATE_SYNONYMS.get(collapsed.lower(), collapsed)


def content_hash(title: Optional[str], source_name: Optional[str]) -> str:
    """
    Deduplication key for a notice: SHA-256 hex digest of
    lower(trim(display_title + "|" + source_name)).

    The title goes through normalize_title_for_display first so that
    "Latest: X" and "X" from the same source collapse to one notice.
    Changing this definition invalidates every stored hash.
    """
    normalized_title = normalize_title_for_display(title)
    source = (source_name or "").strip()
    key = f"{normalized_title}|{source}".lower().strip()
    return hashlib.sha256(key.encode('utf-8')).hexdigest()
