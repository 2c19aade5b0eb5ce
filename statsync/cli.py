"""Korastats sync command line.

Usage:
    statsync sync
    statsync sync --tournamentId 840 --kinds team,player
    statsync sync --afterDate 2024-07-01 --beforeDate 2025-06-30
    statsync sync --incremental
    statsync sync-specific --kind player --ids 101,102 --tournamentId 840
    statsync clear --kinds referee --beforeDate 2024-01-01

Exit codes: 0 completed (even with entity errors), 1 fatal, 2 bad arguments.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime

from pymongo.errors import PyMongoError

import statsync.database as _db
from statsync import __version__
from statsync.config import settings
from statsync.logging_config import setup_logging
from statsync.models.sync import ALL_KINDS, EntityKind, SyncFilter
from statsync.providers.base import SourceUnavailableError
from statsync.providers.korastats import KorastatsClient
from statsync.services.cache_service import TTLCache
from statsync.services.document_store import DocumentStore
from statsync.services.sync_observer import LoggingSyncObserver
from statsync.services.sync_orchestrator import SyncAlreadyRunningError, SyncOrchestrator
from statsync.utils import parse_utc

log = logging.getLogger("statsync.cli")


def _id_list(value: str) -> set[int]:
    ids: set[int] = set()
    for part in str(value or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.add(int(part))
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid id: {part!r}") from None
    if not ids:
        raise argparse.ArgumentTypeError("expected a comma separated list of ids")
    return ids


def _kind_list(value: str) -> list[EntityKind]:
    kinds: list[EntityKind] = []
    for part in str(value or "").split(","):
        if not part.strip():
            continue
        try:
            kinds.append(EntityKind.parse(part))
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None
    if not kinds:
        raise argparse.ArgumentTypeError("expected at least one kind")
    return kinds


def _iso_date(value: str) -> datetime:
    try:
        return parse_utc(value)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"invalid ISO date: {value!r}") from None


def _add_filter_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--kind", "--kinds", dest="kinds", type=_kind_list, default=None,
                        help="Comma separated kinds: tournament, team, player, coach, referee, standings.")
    parser.add_argument("--beforeDate", dest="before_date", type=_iso_date, default=None)
    parser.add_argument("--afterDate", dest="after_date", type=_iso_date, default=None)
    parser.add_argument("--includeIds", dest="include_ids", type=_id_list, default=None)
    parser.add_argument("--excludeIds", dest="exclude_ids", type=_id_list, default=None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="statsync", description="Sync Korastats data into MongoDB.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL.")
    sub = parser.add_subparsers(dest="command", required=True)

    sync = sub.add_parser("sync", help="Sync every entity referenced by the tournaments.")
    sync.add_argument("--tournamentId", dest="tournament_id", type=int, default=None)
    sync.add_argument("--incremental", action="store_true",
                      help="Only tournaments running since the last completed sync.")
    _add_filter_args(sync)

    clear = sub.add_parser("clear", help="Delete synced documents.")
    _add_filter_args(clear)

    specific = sub.add_parser("sync-specific", help="Sync selected ids of one kind.")
    specific.add_argument("--kind", "--kinds", dest="kinds", type=_kind_list, required=True)
    specific.add_argument("--ids", type=_id_list, required=True)
    specific.add_argument("--tournamentId", dest="tournament_id", type=int, default=None)
    return parser


def _sync_filter(args: argparse.Namespace) -> SyncFilter:
    return SyncFilter(
        include_ids=getattr(args, "include_ids", None),
        exclude_ids=getattr(args, "exclude_ids", None) or set(),
        after_date=getattr(args, "after_date", None),
        before_date=getattr(args, "before_date", None),
    )


def _print_report(report) -> None:
    print(f"processed={report.processed} errors={len(report.errors)}")
    for message in report.errors:
        print(message)


async def run(args: argparse.Namespace, orchestrator: SyncOrchestrator | None = None) -> int:
    owns_resources = orchestrator is None
    source = None
    try:
        if owns_resources:
            await _db.connect_db()
            source = KorastatsClient()
            orchestrator = SyncOrchestrator(
                source, DocumentStore(), TTLCache(), observer=LoggingSyncObserver()
            )

        if args.command == "sync":
            report = await orchestrator.sync(
                args.tournament_id,
                args.kinds or ALL_KINDS,
                _sync_filter(args),
                incremental=getattr(args, "incremental", False),
            )
            _print_report(report)
        elif args.command == "sync-specific":
            if len(args.kinds) != 1:
                print("sync-specific takes exactly one kind", file=sys.stderr)
                return 2
            report = await orchestrator.sync_specific(args.kinds[0], sorted(args.ids), args.tournament_id)
            _print_report(report)
        else:
            deleted = await orchestrator.clear(args.kinds or ALL_KINDS, _sync_filter(args))
            print(f"deleted={sum(deleted.values())}")
            for kind, count in deleted.items():
                log.info("%s: deleted %d", kind, count)
        return 0
    except SyncAlreadyRunningError as exc:
        log.error("%s", exc)
        return 1
    except SourceUnavailableError as exc:
        log.error("Korastats unreachable: %s", exc)
        return 1
    except PyMongoError as exc:
        log.error("MongoDB unavailable: %s", exc)
        return 1
    finally:
        if source is not None:
            await source.aclose()
        if owns_resources:
            await _db.close_db()


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level or settings.LOG_LEVEL)
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
