import asyncio
import io

import pytest

from core.catalog import CatalogEntry
from core.dispatcher import Job, dispatch
from core.logger import Logger
from core.verifier import LivenessChecker
from core.worker_pool import WorkerPool


class RecordingPool:
    """Stands in for WorkerPool and keeps what the driver hands it."""

    def __init__(self):
        self.jobs = []
        self.drains = 0

    async def schedule(self, job):
        assert self.drains == 0, "job scheduled after the pool was drained"
        self.jobs.append(job)

    async def run_and_wait(self):
        self.drains += 1


@pytest.mark.asyncio
async def test_one_job_per_populated_field_in_field_order():
    entries = [
        CatalogEntry(
            name="Everything",
            url="https://a.example",
            windows="https://a.example/win",
            android="https://a.example/android",
            mac="https://a.example/mac",
            webapp="https://a.example/app",
            original_url="https://old.a.example",
        ),
        CatalogEntry(name="Just Mac", mac="https://b.example/mac"),
    ]
    pool = RecordingPool()

    scheduled = await dispatch(entries, pool)

    assert scheduled == 7
    assert pool.jobs == [
        Job("Everything", "https://a.example"),
        Job("Everything", "https://a.example/win"),
        Job("Everything", "https://a.example/android"),
        Job("Everything", "https://a.example/mac"),
        Job("Everything", "https://a.example/app"),
        Job("Everything", "https://old.a.example"),
        Job("Just Mac", "https://b.example/mac"),
    ]
    assert pool.drains == 1


@pytest.mark.asyncio
async def test_entries_without_links_create_no_jobs():
    entries = [
        CatalogEntry(name="Nothing"),
        CatalogEntry(name="Blank", url="", windows="   "),
    ]
    pool = RecordingPool()

    assert await dispatch(entries, pool) == 0
    assert pool.jobs == []
    assert pool.drains == 1


@pytest.mark.asyncio
async def test_empty_catalog_still_drains_pool():
    pool = RecordingPool()

    assert await dispatch([], pool) == 0
    assert pool.drains == 1


@pytest.mark.asyncio
async def test_every_job_reaches_the_checker_once():
    checked = []

    async def handler(job):
        await asyncio.sleep(0)
        checked.append(job)

    entries = [
        CatalogEntry(name=f"Site {i}", url=f"https://{i}.example", webapp=f"https://{i}.example/app")
        for i in range(15)
    ]
    pool = WorkerPool(4, handler, max_queue_size=3)

    await dispatch(entries, pool)

    assert len(checked) == 30
    assert set(checked) == {job for entry in entries for job in (
        Job(entry.name, entry.url), Job(entry.name, entry.webapp))}


@pytest.mark.asyncio
async def test_concurrent_failures_write_whole_lines():
    stdout, stderr = io.StringIO(), io.StringIO()
    entries = [CatalogEntry(name=f"Dead {i}", url="http://127.0.0.1:1/") for i in range(12)]

    async with LivenessChecker(timeout=2, logger=Logger(stdout=stdout, stderr=stderr)) as checker:
        pool = WorkerPool(6, checker.check_job)
        await dispatch(entries, pool)

    written = stdout.getvalue().splitlines()
    assert len(written) == 12
    assert sorted(line.split(":", 1)[0] for line in written) == sorted(
        f"HTTP request failed to Dead {i}" for i in range(12))
    assert stderr.getvalue() == ""
