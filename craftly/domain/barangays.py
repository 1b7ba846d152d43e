"""Barangays of Dagupan City, the marketplace's delivery area."""

DAGUPAN_BARANGAYS: tuple[str, ...] = (
    "Acubans",
    "Andaya",
    "Bacayao",
    "Bonuan",
    "Bonuan-Binacayan",
    "Bolosan",
    "Burgos",
    "Camuning",
    "Central",
    "Chumabol",
    "Coloma",
    "Cruces",
    "Culat",
    "Dewey",
    "Dinalaahan",
    "Dorongan",
    "Espino",
    "Famy",
    "Gat-Agao",
    "Gila",
    "Guinobatan",
    "Herrera",
    "Javellana",
    "La Paz",
    "Lusoc",
    "Magsaysay",
    "Malacabang",
    "Malasipit",
    "Malasugui",
    "Pantal",
    "Tangos",
)

_NORMALIZED = {name.lower(): name for name in DAGUPAN_BARANGAYS}


def is_valid_barangay(barangay: str | None) -> bool:
    """True if barangay names a Dagupan barangay (case-insensitive, surrounding spaces ignored)."""
    if not barangay or not isinstance(barangay, str):
        return False
    return barangay.strip().lower() in _NORMALIZED


def canonical_barangay(barangay: str) -> str | None:
    """Return the canonical spelling of barangay, or None if it is not in Dagupan."""
    return _NORMALIZED.get(barangay.strip().lower())


def barangay_matches(term: str | None) -> list[str]:
    """Barangays whose name contains term (case-insensitive); all of them for an empty term."""
    if not term or not term.strip():
        return list(DAGUPAN_BARANGAYS)
    needle = term.strip().lower()
    return [name for name in DAGUPAN_BARANGAYS if needle in name.lower()]
