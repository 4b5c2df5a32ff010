"""
Celery tasks for fixture generation.
"""

from datetime import datetime
import traceback

from fixture_scheduler.core.celery_app import celery_app
from fixture_scheduler.core.exceptions import FixtureSchedulerException
from fixture_scheduler.core.logging_config import get_logger
from fixture_scheduler.api.schemas import FixtureRequest, FixtureResponse
from fixture_scheduler.services.engine import generate_fixtures

logger = get_logger(__name__)


@celery_app.task(bind=True, name="generate_fixtures")
def generate_fixtures_task(self, payload: dict):
    """
    Background fixture generation.

    Args:
        payload: FixtureRequest as JSON-compatible dict (camelCase keys)

    Returns:
        dict: FixtureResponse data, or an error summary
    """
    try:
        self.update_state(state="PROGRESS", meta={"status": "Reading tournament configuration..."})

        start_time = datetime.now()
        request = FixtureRequest.model_validate(payload)
        teams, config = request.to_domain()

        self.update_state(
            state="PROGRESS",
            meta={"status": f"Generating fixtures for {len(teams)} teams..."}
        )

        result = generate_fixtures(teams, config)
        generation_time = (datetime.now() - start_time).total_seconds()

        return FixtureResponse.from_result(result, generation_time).model_dump(mode="json", by_alias=True)

    except FixtureSchedulerException as e:
        logger.warning("Fixture generation rejected: %s", e)
        return {
            "success": False,
            "message": f"Fixture generation failed: {str(e)}",
            "error": str(e),
            "errors": getattr(e, "errors", [str(e)])
        }

    except Exception as e:
        error_trace = traceback.format_exc()
        logger.exception("Error in generate_fixtures_task")

        return {
            "success": False,
            "message": f"Fixture generation failed: {str(e)}",
            "error": str(e),
            "traceback": error_trace
        }
