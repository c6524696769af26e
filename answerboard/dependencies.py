"""
FastAPI dependencies shared by the routers.
"""
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from .core.uuid_type import normalize_uuid
from .db import get_db
from .services.reputation_ledger import ReputationLedger, build_ledger


def get_reputation_ledger(db: Session = Depends(get_db)) -> ReputationLedger:
    return build_ledger(db)


def get_current_user_id(request: Request) -> str:
    """Caller identity, forwarded by the auth gateway in X-User-Id."""
    header_val = request.headers.get("X-User-Id")
    if not header_val:
        raise HTTPException(status_code=401, detail="user_id required")
    try:
        return normalize_uuid(header_val)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user id")
