from __future__ import annotations

import re
from typing import Optional

from models.enums import LegalForm


_PHRASES = {
    "gesellschaft mit beschränkter haftung": LegalForm.GMBH,
    "beschränkter haftung": LegalForm.GMBH,
    "aktiengesellschaft": LegalForm.AG,
    "unternehmergesellschaft": LegalForm.UG,
    "kommanditgesellschaft auf aktien": LegalForm.KGAA,
    "kommanditgesellschaft": LegalForm.KG,
    "offene handelsgesellschaft": LegalForm.OHG,
    "gesellschaft bürgerlichen rechts": LegalForm.GBR,
    "eingetragener kaufmann": LegalForm.EK,
    "eingetragene kauffrau": LegalForm.EK,
}

_SHORTS = {
    "gmbh": LegalForm.GMBH,
    "ag": LegalForm.AG,
    "se": LegalForm.SE,
    "ug": LegalForm.UG,
    "ug (haftungsbeschränkt)": LegalForm.UG,
    "kgaa": LegalForm.KGAA,
    "kg": LegalForm.KG,
    "ohg": LegalForm.OHG,
    "gbr": LegalForm.GBR,
    "e.k.": LegalForm.EK,
    "ek": LegalForm.EK,
    "gmbh & co. kg": LegalForm.GMBH_CO_KG,
    "ag & co. kg": LegalForm.AG_CO_KG,
    "se & co. kg": LegalForm.SE_CO_KG,
}


def canonical_legal_form(raw: Optional[str]) -> Optional[LegalForm]:
    """Map spellings like 'gmbh', 'GmbH & Co KG' or the long German name to a LegalForm."""
    if not raw:
        return None
    text = str(raw).strip().strip("\"'")
    low = text.lower()
    if low in _SHORTS:
        return _SHORTS[low]

    # Longest phrases first so "kommanditgesellschaft auf aktien" wins over "kommanditgesellschaft"
    for phrase in sorted(_PHRASES, key=len, reverse=True):
        if phrase in low:
            return _PHRASES[phrase]

    normalized = re.sub(r"\s*\([^)]*\)\s*", " ", low)
    normalized = re.sub(r"\s+", " ", normalized.replace(",", " ")).strip()
    normalized = re.sub(r"& co\.? kg$", "& co. kg", normalized)
    if normalized in _SHORTS:
        return _SHORTS[normalized]

    token = re.sub(r"[^a-z.]", "", low)
    return _SHORTS.get(token)


def normalize_legal_form(raw: Optional[str]) -> str:
    """Canonical spelling when recognized; anything else is returned trimmed."""
    form = canonical_legal_form(raw)
    if form is not None:
        return form.value
    return (raw or "").strip()
