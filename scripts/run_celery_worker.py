"""
Start a Celery worker that runs generate_fixtures_task for POST /api/fixtures/async.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fixture_scheduler.core.celery_app import celery_app
from fixture_scheduler.core.config import LOG_LEVEL, WORKER_CONCURRENCY


def main():
    parser = argparse.ArgumentParser(description="Run the fixture generation worker")
    parser.add_argument("--concurrency", type=int, default=WORKER_CONCURRENCY)
    parser.add_argument("--loglevel", default=LOG_LEVEL.lower())
    args = parser.parse_args()

    # prefork is unavailable on Windows
    pool = "solo" if os.name == "nt" else "prefork"

    celery_app.worker_main([
        "worker",
        f"--loglevel={args.loglevel}",
        f"--concurrency={args.concurrency}",
        f"--pool={pool}",
    ])


if __name__ == "__main__":
    main()
