from fastapi import APIRouter, Depends

from app.core.permissions import allowed_operations, readable_entities
from app.routers.auth_deps import get_identity
from app.schemas.auth import Identity

router = APIRouter(prefix="/session", tags=["Session"])


@router.get("")
def get_session(identity: Identity = Depends(get_identity)):
    """
    The resolved caller plus what the policy lets them do, so the dashboard can
    hide actions up front. The record service still re-checks every call.
    """
    return {
        **identity.model_dump(by_alias=True),
        "permissions": {
            entity.value: sorted(op.value for op in allowed_operations(entity, identity))
            for entity in readable_entities(identity)
        },
    }
