from fastapi import APIRouter, BackgroundTasks, Depends, Request

from whichcard.agents.orchestrator import RecommendationOrchestrator
from whichcard.api.dependencies import get_orchestrator, get_usage_sink
from whichcard.schemas.requests import RecommendRequest
from whichcard.schemas.responses import CardRulesResponse, CategoriesResponse, RecommendResponse
from whichcard.usage.consent import allows_logging, parse_consent_from_cookie
from whichcard.usage.request_meta import RequestMetadata
from whichcard.usage.sink import UsageSink, log_card_request

router = APIRouter(tags=["recommend"])


@router.post("/recommend", response_model=RecommendResponse)
def recommend(
    payload: RecommendRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
    sink: UsageSink | None = Depends(get_usage_sink),
) -> RecommendResponse:
    card_settings, result = orchestrator.evaluate(payload)

    consent = parse_consent_from_cookie(request.headers.get("cookie"))
    if allows_logging(consent) and result.results:
        background_tasks.add_task(
            log_card_request,
            sink,
            consent,
            payload.purchase,
            result,
            card_settings,
            RequestMetadata.from_headers(request.headers, payload.gps_location),
        )

    return RecommendResponse(
        best_card=result.best_card,
        ranked_cards=result.results,
        purchase=payload.purchase,
        settings=card_settings,
    )


@router.get("/cards", response_model=list[CardRulesResponse])
def cards(orchestrator: RecommendationOrchestrator = Depends(get_orchestrator)) -> list[CardRulesResponse]:
    return orchestrator.describe_cards()


@router.get("/categories", response_model=CategoriesResponse)
def categories(q: str = "", orchestrator: RecommendationOrchestrator = Depends(get_orchestrator)) -> CategoriesResponse:
    return orchestrator.categories(q)
