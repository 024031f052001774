"""Token endpoint handing out bearer tokens for the catalog."""

from __future__ import annotations

from fastapi import APIRouter, status

from movies.core.auth import issue_token
from movies.schemas import ErrorResponse, TokenResponse

router = APIRouter()


@router.get(
    "",
    response_model=TokenResponse,
    summary="Issue a JWT valid for 24 hours",
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
)
def get_token() -> TokenResponse:
    return TokenResponse(token=issue_token())
