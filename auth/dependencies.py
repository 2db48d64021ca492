"""
FastAPI dependencies for authentication.

The workflow and token service are built once in ``main.create_app`` and
stored on ``app.state``; these helpers hand them to route handlers.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.errors import InvalidToken
from auth.tokens import TokenService
from auth.workflow import AuthWorkflow

_bearer_scheme = HTTPBearer()


def get_workflow(request: Request) -> AuthWorkflow:
    return request.app.state.workflow


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


async def get_current_subject(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated
    account email.
    """
    try:
        return tokens.subject(credentials.credentials)
    except InvalidToken:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
