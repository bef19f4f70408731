from typing import Optional

from fastapi import APIRouter, Body, Depends, Header

from catering.api.dependencies import Services, bearer_token, get_caller, get_services, require_csrf
from catering.domain.Caller import CallerContext

router = APIRouter(tags=["auth"])


@router.get("/api/security/csrf-token")
def api_csrf_token(x_session_id: Optional[str] = Header(default=None),
                   services: Services = Depends(get_services)):
    """Issue an anti-forgery token for the session, creating a session id when none is sent."""
    session_id = x_session_id or services.csrf.new_session_id()
    return {"session_id": session_id, "csrf_token": services.csrf.issue(session_id)}


@router.post("/api/auth/sign-up", status_code=201, dependencies=[Depends(require_csrf)])
def api_sign_up(payload: dict = Body(...), services: Services = Depends(get_services)):
    account = services.accounts.sign_up(payload)
    return {"account": account.public_dict()}


@router.post("/api/auth/sign-in", dependencies=[Depends(require_csrf)])
def api_sign_in(payload: dict = Body(...), services: Services = Depends(get_services)):
    token, caller = services.accounts.sign_in(payload)
    return {
        "access_token": token,
        "token_type": "bearer",
        "account": {"id": caller.account_id, "email": caller.email, "full_name": caller.full_name,
                    "role": caller.role},
    }


@router.post("/api/auth/sign-out")
def api_sign_out(token: Optional[str] = Depends(bearer_token), x_session_id: Optional[str] = Header(default=None),
                 services: Services = Depends(get_services)):
    """End the bearer session and drop the anti-forgery token of the browser session."""
    if token:
        services.accounts.sign_out(token)
    if x_session_id:
        services.csrf.clear(x_session_id)
    return {"success": True}


@router.get("/api/auth/me")
def api_me(caller: CallerContext = Depends(get_caller)):
    return {"id": caller.account_id, "email": caller.email, "full_name": caller.full_name,
            "role": caller.role, "is_admin": caller.is_admin}
