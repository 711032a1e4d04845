# Fichier : pix_api/utils/text_utils.py
from __future__ import annotations

import re
import unicodedata
from difflib import SequenceMatcher

_WHITESPACE = re.compile(r"\s+")


def strip_accents(s: str) -> str:
    return "".join(c for c in unicodedata.normalize("NFD", s) if unicodedata.category(c) != "Mn")


def normalize_spaces_case_accents(s: str) -> str:
    """Traitement t1: supprime espaces, majuscules et accents. "Élé phant " -> "elephant"."""
    return _WHITESPACE.sub("", strip_accents(s)).lower()


def strip_punctuation(s: str) -> str:
    """Traitement t2: supprime toute ponctuation Unicode (catégories P*)."""
    return "".join(c for c in s if not unicodedata.category(c).startswith("P"))


def similarity_ratio(a: str, b: str) -> float:
    """Traitement t3: ressemblance entre 0 et 1 (1 = identiques)."""
    return SequenceMatcher(None, a, b).ratio()
