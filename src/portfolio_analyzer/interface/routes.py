"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from portfolio_analyzer.interface.dependencies import get_use_case
from portfolio_analyzer.interface.schemas import AnalysisResponse, AnalyzeRequest
from portfolio_analyzer.services.analyze_profile import AnalyzeProfileUseCase

router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses={
        422: {"description": "Invalid GitHub username or profile URL"},
        403: {"description": "GitHub denied access"},
        404: {"description": "GitHub user not found"},
        429: {"description": "GitHub API rate limit exceeded"},
        502: {"description": "GitHub API unreachable or returned malformed data"},
    },
)
async def analyze(
    body: AnalyzeRequest,
    use_case: AnalyzeProfileUseCase = Depends(get_use_case),
) -> AnalysisResponse:
    """Score a public GitHub profile and suggest improvements."""
    result = await use_case.execute(body.profile)
    return AnalysisResponse.from_domain(result)
