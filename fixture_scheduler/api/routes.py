"""
API routes for fixture generation.
"""

from datetime import datetime

from celery.result import AsyncResult
from fastapi import APIRouter, HTTPException

from fixture_scheduler.api.schemas import FixtureRequest, FixtureResponse, ValidationResponse
from fixture_scheduler.services.engine import generate_fixtures, check_solver
from fixture_scheduler.services.validator import validate_configuration
from fixture_scheduler.core.exceptions import FixtureConfigurationError, SolverUnavailableError
from fixture_scheduler.core.celery_app import celery_app
from fixture_scheduler.core.logging_config import get_logger
from fixture_scheduler.tasks.fixture_tasks import generate_fixtures_task

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["fixtures"])


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.post("/fixtures", response_model=FixtureResponse)
def create_fixtures(request: FixtureRequest):
    """
    Generate fixtures for a tournament.

    Validation failures return 400 with the list of errors. Matches that
    cannot be placed are still returned, with a VENUE_CLASH conflict.
    """
    start_time = datetime.now()

    try:
        teams, config = request.to_domain()
        result = generate_fixtures(teams, config)
    except FixtureConfigurationError as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": e.errors})
    except SolverUnavailableError as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": [str(e)]})
    except Exception as e:
        logger.exception("Fixture generation failed")
        raise HTTPException(status_code=500, detail=f"Fixture generation failed: {str(e)}")

    generation_time = (datetime.now() - start_time).total_seconds()
    return FixtureResponse.from_result(result, generation_time)


@router.post("/fixtures/validate", response_model=ValidationResponse)
def validate_fixtures_request(request: FixtureRequest):
    """Run configuration validation only."""
    try:
        teams, config = request.to_domain()
    except FixtureConfigurationError as e:
        return ValidationResponse(is_valid=False, errors=e.errors)

    validation = validate_configuration(teams, config)
    errors = list(validation.errors)
    try:
        check_solver(config)
    except SolverUnavailableError as e:
        errors.append(str(e))

    return ValidationResponse(is_valid=not errors, errors=errors)


@router.post("/fixtures/async")
async def create_fixtures_async(request: FixtureRequest):
    """
    Start background fixture generation.

    Returns:
        dict: Task ID for polling status
    """
    try:
        task = generate_fixtures_task.delay(request.model_dump(mode="json", by_alias=True))
    except Exception as e:
        logger.exception("Failed to queue fixture generation")
        raise HTTPException(status_code=500, detail=f"Failed to start task: {str(e)}")

    return {
        "task_id": task.id,
        "status": "PENDING",
        "message": "Fixture generation started"
    }


@router.get("/fixtures/status/{task_id}")
async def get_fixtures_status(task_id: str):
    """
    Get status of a background fixture generation task.

    Args:
        task_id: Celery task ID
    """
    try:
        task_result = AsyncResult(task_id, app=celery_app)
        state = task_result.state
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {str(e)}")

    if state == "PENDING":
        return {"task_id": task_id, "status": "PENDING", "message": "Task is waiting to start..."}
    if state == "PROGRESS":
        info = task_result.info or {}
        return {"task_id": task_id, "status": "PROGRESS", "message": info.get("status", "Processing...")}
    if state == "SUCCESS":
        return {"task_id": task_id, "status": "SUCCESS", "result": task_result.result}
    if state == "FAILURE":
        return {"task_id": task_id, "status": "FAILURE", "message": str(task_result.info)}

    return {"task_id": task_id, "status": state, "message": f"Task state: {state}"}
