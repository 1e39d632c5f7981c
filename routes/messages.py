from fastapi import APIRouter, status

from models.message_model import InboxView, MarkReadResult, MessageCreate, MessageResponse
from dependencies.auth import CurrentActiveUser
from dependencies.message import MessageServiceDep

router = APIRouter()

@router.get("/inbox", response_model=InboxView)
async def get_inbox(
    current_user: CurrentActiveUser,
    message_service: MessageServiceDep
):
    """Conversations of the current user, most recent first, with their threads"""
    return await message_service.get_inbox(current_user.id)

@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    message: MessageCreate,
    current_user: CurrentActiveUser,
    message_service: MessageServiceDep
):
    """Send a message; the sender is always the current user"""
    return await message_service.send_reply(
        sender_id=current_user.id,
        receiver_id=message.receiver_id,
        content=message.content,
        conversation_id=message.conversation_id,
        related_opportunity_id=message.related_opportunity_id,
    )

@router.post("/conversations/{conversation_id}/read", response_model=MarkReadResult)
async def mark_conversation_as_read(
    conversation_id: str,
    current_user: CurrentActiveUser,
    message_service: MessageServiceDep
):
    """Mark the messages the current user received in a conversation as read"""
    return await message_service.mark_conversation_as_read(current_user.id, conversation_id)

@router.post("/{message_id}/read", response_model=MessageResponse)
async def mark_message_as_read(
    message_id: str,
    current_user: CurrentActiveUser,
    message_service: MessageServiceDep
):
    """Mark a single received message as read"""
    return await message_service.mark_message_as_read(current_user.id, message_id)
