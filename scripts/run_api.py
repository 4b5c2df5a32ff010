"""
Serve the fixture API (fixture_scheduler.main:app) with uvicorn.
"""

import argparse
import os
import sys

import uvicorn

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fixture_scheduler.core.config import API_HOST, API_PORT


def main():
    parser = argparse.ArgumentParser(description="Run the fixture scheduling API")
    parser.add_argument("--host", default=API_HOST)
    parser.add_argument("--port", type=int, default=API_PORT)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    print(f"Fixture API on http://{args.host}:{args.port} (docs at /docs)")

    uvicorn.run(
        "fixture_scheduler.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info"
    )


if __name__ == "__main__":
    main()
