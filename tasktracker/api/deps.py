from typing import Optional

from fastapi import Depends, Header
from sqlmodel import Session

from tasktracker.core.errors import Unauthenticated
from tasktracker.db.session import get_session
from tasktracker.models.user import User
from tasktracker.stores.credentials import get_user

USER_ID_HEADER = "x-user-id"


def get_current_user(
    user_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER),
    session: Session = Depends(get_session),
) -> User:
    # NOTE: the caller is identified by a bare numeric id. Nothing proves the
    # caller owns that id; replacing it with a signed session token would
    # change the client contract.
    if not user_id:
        raise Unauthenticated("Authentication required")

    try:
        parsed_id = int(user_id)
    except ValueError:
        raise Unauthenticated("Invalid user")

    return get_user(session, parsed_id)
