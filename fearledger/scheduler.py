"""A FIFO job queue drained one job at a time by a named worker."""

from __future__ import annotations

import json
import uuid
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class JobKind(Enum):
    GIT_MAINTENANCE = "GitMaintenance"
    ECO_SCAN = "EcoScan"
    AUDIT_LINEAGE = "AuditLineage"


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Job:
    """A unit of work with a JSON payload."""

    kind: JobKind
    payload: Any
    id: str = field(default_factory=_new_id)


class JobQueue:
    """First-in, first-out queue of jobs."""

    def __init__(self) -> None:
        self._items: deque[Job] = deque()

    def push(self, job: Job) -> None:
        self._items.append(job)

    def pop(self) -> Job | None:
        """The oldest job, or None when the queue is empty."""
        return self._items.popleft() if self._items else None

    def __len__(self) -> int:
        return len(self._items)


class Worker:
    """Executes jobs by announcing them on standard output."""

    def __init__(self, name: str) -> None:
        self.name = name

    async def execute(self, job: Job) -> str:
        """Announce the job and return the announced line."""
        line = f"Worker {self.name}: {job.kind.value} {json.dumps(job.id)}"
        print(line)
        return line


class Scheduler:
    """A queue paired with a single worker."""

    def __init__(self, worker_name: str) -> None:
        self.queue = JobQueue()
        self.worker = Worker(worker_name)

    def enqueue_git_maintenance(self, payload: Any) -> Job:
        """Queue a git maintenance job and return it."""
        job = Job(JobKind.GIT_MAINTENANCE, payload)
        self.queue.push(job)
        return job

    async def run_once(self) -> str | None:
        """Execute the oldest job; None when there was nothing to do."""
        job = self.queue.pop()
        if job is None:
            return None
        return await self.worker.execute(job)