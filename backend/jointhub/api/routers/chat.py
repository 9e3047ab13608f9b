from fastapi import APIRouter, Depends

from jointhub.api.deps import get_chat_identity
from jointhub.core.security import Identity
from jointhub.schemas.chat import ChatMessage, SaveMessageIn, SuccessOut
from jointhub.services.chat_store import chat_store

router = APIRouter(prefix="/chat", tags=["chat"])

@router.get("/history", response_model=list[ChatMessage])
async def history(identity: Identity = Depends(get_chat_identity)):
    """
    Return the caller's messages in display order.
    A user who never saved anything gets an empty list.
    """
    return await chat_store.history(identity.id)

@router.post("/save", response_model=SuccessOut)
async def save(body: SaveMessageIn, identity: Identity = Depends(get_chat_identity)):
    """Append one message; the log keeps only the newest 100."""
    await chat_store.append(identity.id, body.message.model_dump())
    return {"success": True}

@router.post("/clear", response_model=SuccessOut)
async def clear(identity: Identity = Depends(get_chat_identity)):
    await chat_store.clear(identity.id)
    return {"success": True}
