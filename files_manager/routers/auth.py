# Filename: files_manager/routers/auth.py
from fastapi import APIRouter, Depends, Header, Request, Response, status
from typing import Optional

from ..auth import AuthGate, get_token_from_headers, get_auth_gate
from ..schemas import Token

router = APIRouter(tags=["auth"])


@router.get("/connect", response_model=Token)
def connect(authorization: Optional[str] = Header(None), gate: AuthGate = Depends(get_auth_gate)):
    """Trade Basic credentials for a token valid for 24 hours."""
    return Token(token=gate.mint_token(authorization))


@router.get("/disconnect", status_code=status.HTTP_204_NO_CONTENT)
def disconnect(request: Request, gate: AuthGate = Depends(get_auth_gate)):
    gate.revoke_token(get_token_from_headers(request))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
