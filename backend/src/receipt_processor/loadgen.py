"""
Concurrent load generator for the receipt API.

Submits the same receipt many times through a fixed pool of workers and
reports the status codes and identifiers that came back. A healthy server
hands out one distinct identifier per request.

Usage:
    receipt-loadgen --base-url http://localhost:8080 --requests 800 --workers 50
    receipt-loadgen --payload tests/data/mm_corner_market.json
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_REQUESTS = 800
DEFAULT_WORKERS = 50
PROCESS_PATH = "/receipts/process"

SAMPLE_RECEIPT: dict[str, Any] = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}


@dataclass
class LoadReport:
    """Outcome of a load run."""
    sent: int = 0
    succeeded: int = 0
    failed: int = 0
    duplicate_ids: int = 0
    status_codes: dict[int, int] = field(default_factory=dict)
    errors: dict[str, int] = field(default_factory=dict)
    ids: set[str] = field(default_factory=set)

    def record_response(self, response: httpx.Response) -> None:
        """Record a completed request."""
        self.sent += 1
        self.status_codes[response.status_code] = self.status_codes.get(response.status_code, 0) + 1

        if response.status_code != 200:
            self.failed += 1
            return

        try:
            receipt_id = str(response.json()["id"])
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(f"Response without a receipt id: {response.text[:100]!r}")
            self.failed += 1
            self._count_error(e)
            return

        self.succeeded += 1
        if receipt_id in self.ids:
            self.duplicate_ids += 1
        else:
            self.ids.add(receipt_id)

    def record_error(self, error: Exception) -> None:
        """Record a request that never got a response."""
        self.sent += 1
        self.failed += 1
        self._count_error(error)

    def _count_error(self, error: Exception) -> None:
        name = type(error).__name__
        self.errors[name] = self.errors.get(name, 0) + 1

    def summary(self) -> str:
        """One-line human summary."""
        return (
            f"sent={self.sent} succeeded={self.succeeded} failed={self.failed} "
            f"distinct_ids={len(self.ids)} duplicate_ids={self.duplicate_ids} "
            f"status_codes={dict(sorted(self.status_codes.items()))}"
        )


async def _worker(
    worker_id: int,
    client: httpx.AsyncClient,
    payload: dict[str, Any],
    jobs: asyncio.Queue,
    report: LoadReport,
) -> None:
    """Drain the job queue, posting one receipt per job."""
    while True:
        try:
            job = jobs.get_nowait()
        except asyncio.QueueEmpty:
            return

        logger.debug(f"Worker {worker_id} sending request {job}")
        try:
            response = await client.post(PROCESS_PATH, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"Worker {worker_id} request {job} failed: {e}")
            report.record_error(e)
        else:
            report.record_response(response)
        finally:
            jobs.task_done()


async def run_load(
    client: httpx.AsyncClient,
    payload: dict[str, Any] | None = None,
    requests: int = DEFAULT_REQUESTS,
    workers: int = DEFAULT_WORKERS,
) -> LoadReport:
    """
    Submit a receipt `requests` times using `workers` concurrent workers.

    Args:
        client: Client with base_url pointing at the receipt API
        payload: Receipt JSON to submit. Uses SAMPLE_RECEIPT if None.
        requests: Total number of submissions
        workers: Number of concurrent workers

    Returns:
        LoadReport with status codes and the identifiers received
    """
    if requests < 0:
        raise ValueError(f"requests must be non-negative, got {requests}")
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    if payload is None:
        payload = SAMPLE_RECEIPT
    jobs: asyncio.Queue = asyncio.Queue()
    for job in range(requests):
        jobs.put_nowait(job)

    report = LoadReport()
    await asyncio.gather(
        *(_worker(worker_id, client, payload, jobs, report) for worker_id in range(workers))
    )
    return report


def load_payload(path: Path | None) -> dict[str, Any]:
    """Read a receipt payload from a JSON file, or return the sample."""
    if path is None:
        return SAMPLE_RECEIPT
    return json.loads(path.read_text(encoding="utf-8"))


async def _run_against(base_url: str, payload: dict[str, Any], requests: int, workers: int) -> LoadReport:
    limits = httpx.Limits(max_connections=workers, max_keepalive_connections=workers)
    async with httpx.AsyncClient(base_url=base_url, limits=limits, timeout=30.0) as client:
        return await run_load(client, payload, requests=requests, workers=workers)


def main(argv: list[str] | None = None) -> int:
    """Command line entry point."""
    parser = argparse.ArgumentParser(description="Submit receipts concurrently to the receipt API")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Receipt API base URL")
    parser.add_argument("--requests", type=int, default=DEFAULT_REQUESTS, help="Number of receipts to submit")
    parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS, help="Concurrent workers")
    parser.add_argument("--payload", type=Path, default=None, help="JSON file with the receipt to submit")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    payload = load_payload(args.payload)
    report = asyncio.run(_run_against(args.base_url, payload, args.requests, args.workers))

    print(report.summary())

    if report.failed or report.duplicate_ids:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
