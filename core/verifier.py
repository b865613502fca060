import aiohttp
import asyncio
import certifi
import logging
import random
import ssl
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from .logger import Logger
from utils.url_cleaner import clean_url

log = logging.getLogger(__name__)

class OutcomeKind(Enum):
    ALIVE = "alive"
    REDIRECTED_ALIVE = "redirected_alive"
    NOT_FOUND = "not_found"
    UNREACHABLE = "unreachable"
    UNTRUSTED_BUT_ALIVE = "untrusted_but_alive"

@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    reason: Optional[str] = None

def describe_error(error):
    """Exception type name, followed by its message when it has one."""
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name

class LivenessChecker:
    def __init__(self, timeout, logger: Logger):
        self.timeout = timeout
        self.logger = logger
        self.session = None
        self.outcome_counts = Counter()
        self.user_agents = [
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0"
        ]

    async def __aenter__(self):
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        headers = {
            "User-Agent": random.choice(self.user_agents),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5"
        }
        self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None, sock_connect=self.timeout, sock_read=self.timeout), connector=connector, headers=headers)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self.session:
            await self.session.close()
            self.session = None
        log.info("Summary: %s", ", ".join(f"{kind.value}={self.outcome_counts[kind]}" for kind in OutcomeKind))

    def _record(self, outcome):
        self.outcome_counts[outcome.kind] += 1
        return outcome

    async def check(self, entry_name, url):
        """Issue one GET for url and classify what came back.

        Failures are reported through the logger and returned as an Outcome;
        nothing is raised to the caller.
        """
        url = clean_url(url)
        try:
            async with self.session.get(url, allow_redirects=False) as response:
                # Draining the body surfaces truncated or badly encoded payloads.
                async for _ in response.content.iter_chunked(65536):
                    pass
                status = response.status
        except aiohttp.ClientSSLError as e:
            # A server presenting any certificate is still answering.
            log.debug("%s: certificate problem at %s (%s)", entry_name, url, describe_error(e))
            return self._record(Outcome(OutcomeKind.UNTRUSTED_BUT_ALIVE))
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            reason = describe_error(e)
            self.logger.info(f"HTTP request failed to {entry_name}: {reason}")
            return self._record(Outcome(OutcomeKind.UNREACHABLE, reason))

        if 300 <= status < 400:
            log.debug("%s: %s redirected with %d", entry_name, url, status)
            return self._record(Outcome(OutcomeKind.REDIRECTED_ALIVE))
        if status == 404:
            self.logger.alert(f"Entry {entry_name} returned HTTP 404")
            return self._record(Outcome(OutcomeKind.NOT_FOUND))
        return self._record(Outcome(OutcomeKind.ALIVE))

    async def check_job(self, job):
        """Pool handler: check the job's URL on behalf of its entry."""
        return await self.check(job.entry_name, job.url)
