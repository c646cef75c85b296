"""Token analysis endpoint."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from config.settings import settings
from src.api.app import limiter
from src.api.dependencies import get_service
from src.parsers.scoring import triggered_penalties
from src.services.analysis_service import TokenSafetyService

router = APIRouter(prefix="/api/v1", tags=["analysis"])


class AnalyzeRequest(BaseModel):
    contract_address: str = Field(..., max_length=70)


@router.post("/analyze")
@limiter.limit(settings.api_rate_limit)
async def analyze(
    request: Request,
    body: AnalyzeRequest,
    service: TokenSafetyService = Depends(get_service),
) -> dict[str, Any]:
    """Run a safety analysis and return the result record.

    Failures are rendered by the AnalysisError handler registered in create_app.
    """
    result = await service.analyze_token(body.contract_address)
    data = result.to_dict()
    data["penalties"] = [
        {"name": rule.name, "points": rule.points, "description": rule.description}
        for rule in triggered_penalties(result.token_metrics, service.penalties)
    ]
    return data
