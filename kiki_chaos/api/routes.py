from typing import Any

from fastapi import APIRouter, Body, Request, status
from fastapi.responses import JSONResponse

from kiki_chaos.models.app import ChaosRunResponse
from kiki_chaos.models.cluster_components import ClusterHealthSnapshot
from kiki_chaos.models.custom_errors import NarrationError
from kiki_chaos.models.scenario.factory import ScenarioFactory
from kiki_chaos.narration.groq_client import ANALYSIS_UNAVAILABLE
from kiki_chaos.utils.logger import get_module_logger

logger = get_module_logger(__name__)

router = APIRouter()


def _components(request: Request):
    return request.app.state.components


@router.post("/chaos/run", response_model=ChaosRunResponse, tags=["chaos"])
def run_chaos(request: Request, payload: Any = Body(default=None)):
    components = _components(request)
    scenario_id = payload.get("scenarioId") if isinstance(payload, dict) else None
    scenario = ScenarioFactory.find(scenario_id)
    if scenario is None:
        return JSONResponse({"error": "Invalid scenario ID"}, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        result = components.dispatcher.execute(scenario.id)
        analysis, score_change = components.narrator.narrate(scenario.id, result)
    except NarrationError as error:
        logger.error("Narration failed for %s: %s", scenario.id, error)
        return _analysis_failed(str(error))
    except Exception as error:
        logger.exception("Chaos run failed for %s", scenario.id)
        return _analysis_failed(str(error) or error.__class__.__name__)

    return ChaosRunResponse(
        analysis=analysis,
        score_change=score_change,
        success=result.success,
        execution_result=result.message,
        execution_details=result.details,
        real_chaos=not result.simulated,
    )


def _analysis_failed(details: str) -> JSONResponse:
    return JSONResponse(
        {
            "error": "Failed to analyze chaos scenario",
            "details": details,
            "analysis": ANALYSIS_UNAVAILABLE,
        },
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@router.get(
    "/cluster/status",
    response_model=ClusterHealthSnapshot,
    response_model_exclude_none=True,
    tags=["cluster"],
)
def cluster_status(request: Request):
    return _components(request).status.status()


@router.get("/cluster/events", tags=["cluster"])
def cluster_events(request: Request):
    events, simulated = _components(request).status.events()
    return {"events": [e.model_dump() for e in events], "simulated": simulated}


@router.get("/scenarios", tags=["chaos"])
def list_scenarios():
    return [scenario.card() for scenario in ScenarioFactory.list_scenarios()]


@router.get("/health", tags=["meta"])
def health(request: Request):
    return {"status": "ok", "workflowUrl": _components(request).settings.workflow_api_url}
