from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from credit_engine.db.database import get_db
from credit_engine.errors import NotFoundError
from credit_engine.services.access_service import AccessService, Actor


def get_current_actor(
    x_actor_id: Optional[str] = Header(None, description="User id of the acting manager"),
    db: Session = Depends(get_db),
) -> Actor:
    """Resolve the acting user. Authentication itself happens upstream."""
    if not x_actor_id:
        raise HTTPException(status_code=401, detail="Missing X-Actor-Id header")
    try:
        return AccessService(db).get_actor(x_actor_id)
    except NotFoundError:
        raise HTTPException(status_code=401, detail=f"Unknown actor '{x_actor_id}'")
