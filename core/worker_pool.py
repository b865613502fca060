import asyncio
import logging

log = logging.getLogger(__name__)

class PoisonPill:
    """Queue item telling the worker that takes it to stop."""

    def __repr__(self):
        return "PoisonPill()"

class WorkerPool:
    """Fixed set of long-lived workers draining one shared job queue.

    Workers start as soon as the pool is built, so it has to be created from
    inside a running event loop. ``handler`` is awaited once per job.
    """

    def __init__(self, size, handler, max_queue_size=0):
        if size < 1:
            raise ValueError(f"Pool size must be at least 1, got {size}")
        self.size = size
        self.handler = handler
        self.jobs = asyncio.Queue(maxsize=max_queue_size)
        self.closed = False
        self.workers = [
            asyncio.create_task(self._consume(worker_id), name=f"worker-{worker_id}")
            for worker_id in range(size)
        ]

    async def _consume(self, worker_id):
        log.debug("Worker %d started", worker_id)
        while True:
            job = await self.jobs.get()
            try:
                if isinstance(job, PoisonPill):
                    break
                try:
                    await self.handler(job)
                except Exception:
                    log.exception("Worker %d: job %r raised", worker_id, job)
            finally:
                self.jobs.task_done()
        log.debug("Worker %d stopped", worker_id)

    async def schedule(self, job):
        """Queue a job, waiting for room when the queue is bounded."""
        if self.closed:
            raise RuntimeError("Cannot schedule jobs after run_and_wait()")
        await self.jobs.put(job)

    async def run_and_wait(self):
        """Send one poison pill per worker and wait for every worker to exit."""
        if self.closed:
            raise RuntimeError("run_and_wait() was already called")
        self.closed = True
        for _ in range(self.size):
            await self.jobs.put(PoisonPill())
        await asyncio.gather(*self.workers)
