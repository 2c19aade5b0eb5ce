"""
tests/test_cli.py

Purpose:
    Verify the statsync command line: argument parsing, report output and
    exit codes for completed, fatal and invalid invocations.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from statsync import cli
from statsync.models.sync import ALL_KINDS, EntityKind, SyncReport
from statsync.providers.base import SourceUnavailableError
from statsync.services.sync_orchestrator import SyncAlreadyRunningError


class _StubOrchestrator:
    def __init__(self, report: SyncReport | None = None, exc: Exception | None = None) -> None:
        self.report = report or SyncReport()
        self.exc = exc
        self.calls: list[tuple] = []

    async def sync(self, tournament_id=None, kinds=None, sync_filter=None, *, incremental=False):
        self.calls.append(("sync", tournament_id, list(kinds), sync_filter))
        self.incremental = incremental
        if self.exc is not None:
            raise self.exc
        return self.report

    async def sync_specific(self, kind, ids, tournament_id=None):
        self.calls.append(("sync_specific", kind, ids, tournament_id))
        return self.report

    async def clear(self, kinds=None, sync_filter=None):
        self.calls.append(("clear", list(kinds), sync_filter))
        return {"team": 3, "player": 2}


def _args(*argv: str):
    return cli._build_parser().parse_args(list(argv))


@pytest.mark.asyncio
async def test_sync_prints_counts_and_errors(capsys):
    report = SyncReport(processed=2, errors=["Failed to sync team Team B (ID: 2): boom"])
    stub = _StubOrchestrator(report)

    code = await cli.run(_args("sync", "--tournamentId", "840", "--kinds", "team,player"), orchestrator=stub)

    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        "processed=2 errors=1",
        "Failed to sync team Team B (ID: 2): boom",
    ]
    _, tournament_id, kinds, _ = stub.calls[0]
    assert tournament_id == 840
    assert kinds == [EntityKind.TEAM, EntityKind.PLAYER]


@pytest.mark.asyncio
async def test_sync_builds_filter_from_flags():
    stub = _StubOrchestrator()

    await cli.run(
        _args("sync", "--afterDate", "2024-07-01", "--beforeDate", "2025-06-30", "--excludeIds", "4, 5"),
        orchestrator=stub,
    )

    _, tournament_id, kinds, sync_filter = stub.calls[0]
    assert tournament_id is None
    assert kinds == list(ALL_KINDS)
    assert sync_filter.after_date == datetime(2024, 7, 1, tzinfo=timezone.utc)
    assert sync_filter.before_date == datetime(2025, 6, 30, tzinfo=timezone.utc)
    assert sync_filter.exclude_ids == {4, 5}
    assert sync_filter.include_ids is None
    assert stub.incremental is False


@pytest.mark.asyncio
async def test_incremental_flag_is_passed_through():
    stub = _StubOrchestrator()

    assert await cli.run(_args("sync", "--incremental", "--kinds", "tournament"), orchestrator=stub) == 0

    assert stub.incremental is True
    assert stub.calls[0][2] == [EntityKind.TOURNAMENT]


@pytest.mark.asyncio
async def test_sync_specific_and_clear(capsys):
    stub = _StubOrchestrator(SyncReport(processed=1))

    assert await cli.run(_args("sync-specific", "--kind", "player", "--ids", "102,101"), orchestrator=stub) == 0
    assert await cli.run(_args("clear", "--kinds", "team,player", "--includeIds", "1"), orchestrator=stub) == 0

    assert stub.calls[0] == ("sync_specific", EntityKind.PLAYER, [101, 102], None)
    assert stub.calls[1][1] == [EntityKind.TEAM, EntityKind.PLAYER]
    assert stub.calls[1][2].include_ids == {1}
    assert capsys.readouterr().out.splitlines() == ["processed=1 errors=0", "deleted=5"]


@pytest.mark.asyncio
async def test_sync_specific_rejects_several_kinds():
    assert await cli.run(_args("sync-specific", "--kinds", "team,player", "--ids", "1"), orchestrator=_StubOrchestrator()) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [
        SyncAlreadyRunningError("Another sync run is already active."),
        SourceUnavailableError("down"),
        ServerSelectionTimeoutError("no servers"),
    ],
)
async def test_fatal_errors_exit_1(exc):
    assert await cli.run(_args("sync"), orchestrator=_StubOrchestrator(exc=exc)) == 1


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["sync", "--kinds", "stadium"],
        ["sync", "--afterDate", "yesterday"],
        ["sync", "--tournamentId", "abc"],
        ["sync-specific", "--kind", "team"],
        ["clear", "--excludeIds", "1,x"],
    ],
)
def test_bad_arguments_exit_2(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    assert excinfo.value.code == 2
