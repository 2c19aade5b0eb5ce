"""
statsync/database.py

Purpose:
    MongoDB connection bootstrap and index management for the canonical
    collections (teams, players, coaches, referees, standings) and the
    sync run journal.

Dependencies:
    - motor.motor_asyncio
    - pymongo
    - statsync.config
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from statsync.config import settings

client: AsyncIOMotorClient = None
db: AsyncIOMotorDatabase = None

logger = logging.getLogger("statsync.database")


async def connect_db() -> None:
    """Open the client, ping the server and ensure indexes.

    Raises pymongo's ServerSelectionTimeoutError when MongoDB is unreachable.
    """
    global client, db
    client = AsyncIOMotorClient(
        settings.MONGO_URI,
        maxPoolSize=10,
        minPoolSize=1,
        serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
    )
    db = client[settings.MONGO_DB]
    await client.admin.command("ping")
    await _ensure_indexes()
    logger.info("Connected to MongoDB database %s", settings.MONGO_DB)


async def close_db() -> None:
    global client, db
    if client:
        client.close()
    client = None
    db = None


async def get_db() -> AsyncIOMotorDatabase:
    return db


async def _ensure_indexes() -> None:
    # ---- Canonical entities (identity is _id = provider id) ----

    await db.tournaments.create_index("name")
    await db.tournaments.create_index("team_ids")
    await db.tournaments.create_index("last_synced")

    await db.teams.create_index("name")
    await db.teams.create_index("tournament_stats.team.id")
    await db.teams.create_index([("tournament_ids", 1), ("name", 1)])
    await db.teams.create_index("last_synced")

    await db.players.create_index("name")
    await db.players.create_index("stats.team.id")
    await db.players.create_index([("stats.league.id", 1), ("stats.league.season", 1)])
    await db.players.create_index("last_synced")

    await db.coaches.create_index("name")
    await db.coaches.create_index("last_synced")

    await db.referees.create_index("name")
    await db.referees.create_index("last_synced")

    # ---- Standings ----

    await db.standings.create_index([("tournament_id", 1), ("season", 1)], unique=True)
    await db.standings.create_index("standings.team.id")
    await db.standings.create_index("last_synced")

    # ---- Sync run journal ----

    await db.sync_runs.create_index([("status", 1), ("started_at", -1)])
    await db.sync_runs.create_index([("type", 1), ("mode", 1), ("started_at", -1)])
    await db.sync_runs.create_index(
        [("active_lock", 1)],
        unique=True,
        partialFilterExpression={"active_lock": True},
        name="sync_runs_single_active_lock",
    )
