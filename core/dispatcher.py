import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class Job:
    entry_name: str
    url: str

async def dispatch(entries, pool):
    """Schedule one job per populated URL field of every entry, then drain the pool."""
    scheduled = 0
    for entry in entries:
        for _, value in entry.urls():
            await pool.schedule(Job(entry.name, value))
            scheduled += 1
    log.debug("Scheduled %d jobs, waiting for workers", scheduled)
    await pool.run_and_wait()
    return scheduled
