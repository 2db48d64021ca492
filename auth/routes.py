"""
Auth API routes — signup, login, whoami.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from auth.dependencies import get_current_subject, get_workflow
from auth.schemas import AuthResult, LoginRequest, SignupRequest
from auth.workflow import AuthWorkflow

router = APIRouter(tags=["auth"])


def _respond(result: AuthResult) -> JSONResponse:
    return JSONResponse(status_code=result.status, content=result.payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report an unparseable or mistyped body as a 400 in the usual error shape."""
    errors = exc.errors()
    message = "invalid request body"
    if errors:
        first = errors[0]
        loc = first.get("loc") or ()
        if first.get("type") == "json_invalid":
            message = "invalid JSON body"
        elif len(loc) > 1:
            message = f"invalid {loc[-1]}: {first.get('msg', 'bad value')}"
    return JSONResponse(status_code=400, content={"error": message})


@router.post("/signup", status_code=201)
async def signup(
    req: SignupRequest,
    workflow: AuthWorkflow = Depends(get_workflow),
) -> JSONResponse:
    """Register a new user."""
    return _respond(await workflow.signup(req))


@router.post("/login")
async def login(
    req: LoginRequest,
    workflow: AuthWorkflow = Depends(get_workflow),
) -> JSONResponse:
    """Login with email + password."""
    return _respond(await workflow.login(req))


@router.get("/me")
async def me(subject: str = Depends(get_current_subject)) -> Dict[str, Any]:
    """Return the identity asserted by the caller's bearer token."""
    return {"email": subject}
