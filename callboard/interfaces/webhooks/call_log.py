"""Call-logging webhook — the voice agent posts call outcomes here."""

import structlog
from fastapi import APIRouter, Depends, status

from callboard.application.services.call_service import log_call
from callboard.domain.repositories.call_repository import CallRepository
from callboard.domain.schemas.call import CallCreate, CallLogged
from callboard.interfaces.api.deps import require_webhook_key
from callboard.interfaces.deps import get_call_repository

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api", tags=["Webhooks"])


@router.post(
    "/logCall",
    response_model=CallLogged,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_webhook_key)],
)
def log_call_webhook(
    body: CallCreate,
    repo: CallRepository = Depends(get_call_repository),
):
    call = log_call(repo, body)
    logger.info("Call logged", call_id=call.id, status=call.status)
    return CallLogged(call_id=call.id)
