"""Static league and country reference data the provider does not expose."""

from __future__ import annotations

DEFAULT_COUNTRY = "Saudi Arabia"
DEFAULT_COUNTRY_CODE = "sa"
FLAG_URL_TEMPLATE = "https://media.api-sports.io/flags/{code}.svg"
DEFAULT_LEAGUE_NAME = "Saudi Pro League"

# Keyed by provider tournament id. 1441 is the 2025 season of the Pro League
# and reports the canonical league id 840.
KNOWN_LEAGUES: dict[int, dict] = {
    934: {
        "id": 934,
        "name": "Pro League U19",
        "logo": "https://media.api-sports.io/football/leagues/308.png",
        "season": 2024,
        "type": "League",
    },
    840: {
        "id": 840,
        "name": "Pro League",
        "logo": "https://media.api-sports.io/football/leagues/307.png",
        "season": 2024,
        "type": "League",
    },
    600: {
        "id": 600,
        "name": "Yelo",
        "logo": "https://media.api-sports.io/football/leagues/309.png",
        "season": 2023,
        "type": "Cup",
    },
    1441: {
        "id": 840,
        "name": "Pro League",
        "logo": "https://media.api-sports.io/football/leagues/307.png",
        "season": 2025,
        "type": "League",
    },
}

COUNTRY_CODES: dict[str, str] = {
    "Saudi Arabia": "sa",
    "United Arab Emirates": "ae",
    "Qatar": "qa",
    "Kuwait": "kw",
    "Bahrain": "bh",
    "Oman": "om",
    "Jordan": "jo",
    "Lebanon": "lb",
    "Syria": "sy",
    "Iraq": "iq",
    "Yemen": "ye",
    "Egypt": "eg",
    "Morocco": "ma",
    "Tunisia": "tn",
    "Algeria": "dz",
    "Libya": "ly",
    "Sudan": "sd",
}


def league_info(tournament_id: int | None) -> dict | None:
    """Return a copy of the known league metadata for a tournament, or None."""
    if tournament_id is None:
        return None
    info = KNOWN_LEAGUES.get(int(tournament_id))
    return dict(info) if info else None


def known_tournament_ids() -> list[int]:
    return sorted(KNOWN_LEAGUES)


def country_code(name: str | None, *, fallback: str | None = None) -> str:
    """ISO-like two-letter code for a country name.

    With ``fallback`` set, unknown names map to it. Without, the code is
    derived from the initials of a two-word name or the first two letters.
    """
    clean = str(name or "").strip()
    if clean in COUNTRY_CODES:
        return COUNTRY_CODES[clean]
    if fallback is not None or not clean:
        return fallback or DEFAULT_COUNTRY_CODE
    words = clean.split()
    if len(words) > 1:
        return (words[0][0] + words[1][0]).lower()
    return clean[:2].lower()


def flag_url(code: str | None) -> str:
    return FLAG_URL_TEMPLATE.format(code=str(code or DEFAULT_COUNTRY_CODE).lower())
