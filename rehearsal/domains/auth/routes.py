# rehearsal/domains/auth/routes.py
from fastapi import APIRouter, Depends
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.domains.auth.dependencies import get_current_profile
from rehearsal.domains.auth.models import SessionState
from rehearsal.domains.auth.service import SessionService

router = APIRouter(prefix="/session", tags=["Sessions"])


@router.get(
    "",
    response_model=SessionState,
    operation_id="getSessionState",
)
async def get_session_state(
    profile: Profile = Depends(get_current_profile), db: Prisma = Depends(get_db)
) -> SessionState:
    service = SessionService(db)
    return await service.get_session_state(profile)
