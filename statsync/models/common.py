"""
statsync/models/common.py

Purpose:
    Shared building blocks of the canonical documents: the identity/sync
    bookkeeping base and small reference shapes reused across entities.

Dependencies:
    - pydantic
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CanonicalRecord(BaseModel):
    """Base for every persisted entity. ``_id`` is the provider's numeric id."""

    id: int = Field(alias="_id")
    last_synced: datetime | None = None
    sync_version: int = 1

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class TeamRef(BaseModel):
    id: int = 0
    name: str = "Unknown Team"
    logo: str = ""


class LeagueRef(BaseModel):
    id: int = 0
    name: str = "Unknown League"
    logo: str = ""
    season: int = 0
    type: str = "League"
    country: str = "Saudi Arabia"
    flag: str = ""


class CountryInfo(BaseModel):
    name: str = "Unknown"
    code: str = ""
    flag: str = ""


class HomeAway(BaseModel):
    home: int = 0
    away: int = 0


class HomeAwayTotal(BaseModel):
    home: int = 0
    away: int = 0
    total: int = 0


class HomeAwayAverage(BaseModel):
    home: float = 0.0
    away: float = 0.0
    total: float = 0.0
