"""
Command-line entry point for the Fixture Scheduling Engine.
Reads teams and configuration from a JSON file, generates fixtures and
prints the report.
"""

import sys
import argparse
import json
import logging
from datetime import datetime
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fixture_scheduler.api.schemas import FixtureRequest, FixtureResponse
from fixture_scheduler.core.exceptions import FixtureSchedulerException
from fixture_scheduler.core.logging_config import setup_logging
from fixture_scheduler.services.engine import generate_fixtures
from fixture_scheduler.services.report import generate_fixture_report


def main():
    """
    Load the tournament file, run the pipeline and print the results.
    """
    parser = argparse.ArgumentParser(
        description='Fixture Scheduling Engine - generate tournament fixtures'
    )
    parser.add_argument(
        'input',
        help='JSON file with "teams" and "config" (same shape as POST /api/fixtures)'
    )
    parser.add_argument(
        '--output',
        help='Write the generated fixtures as JSON to this file'
    )
    parser.add_argument(
        '--solver',
        choices=['greedy', 'cp_sat'],
        help='Override the solver named in the input file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    print("\n" + "=" * 80)
    print("FIXTURE SCHEDULING ENGINE")
    print("=" * 80)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 80)

    try:
        with open(args.input, encoding='utf-8') as f:
            request = FixtureRequest.model_validate(json.load(f))

        teams, config = request.to_domain()
        if args.solver:
            config.solver = args.solver

        print(f"\nLoaded {len(teams)} teams, {len(config.venues)} venues, {len(config.time_slots)} time slots")
        print(f"Format: {config.format}, window: {config.start_date} to {config.end_date}")

        start_time = datetime.now()
        result = generate_fixtures(teams, config)
        generation_time = (datetime.now() - start_time).total_seconds()

        print("\n" + generate_fixture_report(result))

        if result.has_critical_conflicts():
            print(f"\nWARNING: {len(result.unscheduled_fixtures)} fixtures could not be placed "
                  f"or share a venue window - review the conflicts above")

        if args.output:
            response = FixtureResponse.from_result(result, generation_time)
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(response.model_dump_json(by_alias=True, indent=2))
            print(f"\nFixtures written to {args.output}")

        print(f"\nCompleted in {generation_time:.2f}s")
        return 0

    except FixtureSchedulerException as e:
        print(f"\nERROR: {e}")
        return 1

    except KeyboardInterrupt:
        print("\n\nScheduling interrupted by user.")
        return 1


if __name__ == '__main__':
    sys.exit(main())
