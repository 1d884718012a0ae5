import queue
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from .downloader import download_file
from .resolver import resolve
from .state import Counters, FailureCollector, SessionFactory
from .types import (
    CONNECT_TIMEOUT,
    DEFAULT_WORKERS,
    READ_TIMEOUT,
    DownloadError,
    FailureRecord,
    Job,
    RunResult,
    Timeout,
)
from .ui import TerminalUI

_CLOSED = None


def process_job(
    worker_id: int,
    job: Job,
    sessions: SessionFactory,
    timeout: Timeout,
    ui: TerminalUI,
) -> str:
    """Resolve and fetch one job. Returns "downloaded" or "existing"."""
    ui.info(f"worker {worker_id} started {job.url}")
    session = sessions.get()
    direct_url = resolve(session, job.url, timeout=timeout)
    status = download_file(session, direct_url, job.file_stem, timeout=timeout, ui=ui)
    if status == "existing":
        ui.info(f"worker {worker_id} skipped {job.file_stem.name}, already on disk")
    return status


def worker(
    worker_id: int,
    jobs: queue.Queue,
    collector: FailureCollector,
    counters: Counters,
    sessions: SessionFactory,
    timeout: Timeout,
    ui: TerminalUI,
    handler: Callable[..., str] = process_job,
) -> None:
    while True:
        job = jobs.get()
        if job is _CLOSED:
            return
        counters.add("processed")
        try:
            status = handler(worker_id, job, sessions, timeout, ui)
        except DownloadError as exc:
            counters.add("failed")
            collector.report(FailureRecord.from_error(exc))
            continue
        except Exception as exc:
            counters.add("failed")
            collector.report(FailureRecord(kind="internal", cause=f"{type(exc).__name__}: {exc}", url=job.url))
            continue
        counters.add(status)


def run_pipeline(
    jobs: Sequence[Job],
    ui: TerminalUI,
    workers: int = DEFAULT_WORKERS,
    timeout: Timeout = (CONNECT_TIMEOUT, READ_TIMEOUT),
    sessions: Optional[SessionFactory] = None,
    handler: Callable[..., str] = process_job,
) -> RunResult:
    workers = max(1, workers)
    sessions = sessions or SessionFactory()
    counters = Counters()
    job_queue: queue.Queue = queue.Queue(maxsize=workers * 2)

    # collector first so no worker can report into a dead queue
    collector = FailureCollector()
    collector.start()

    try:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="worker") as executor:
            futures = [
                executor.submit(
                    worker,
                    worker_id,
                    job_queue,
                    collector,
                    counters,
                    sessions,
                    timeout,
                    ui,
                    handler,
                )
                for worker_id in range(1, workers + 1)
            ]
            for job in jobs:
                job_queue.put(job)
            for _ in futures:
                job_queue.put(_CLOSED)
        for future in futures:
            future.result()
    finally:
        failures = collector.stop()
    counts = counters.snapshot()
    return RunResult(failures=failures, **counts)


def report(result: RunResult, ui: TerminalUI) -> None:
    ui.info("===============================")
    ui.info(f"Total links processed: {result.processed}")
    ui.info(f"Already existing files count: {result.existing}")
    ui.info(f"Downloaded: {result.downloaded}, failed: {result.failed}")
    ui.info("===============================")
    for failure in result.failures:
        ui.error(f"{failure.url} => {failure.cause}")
