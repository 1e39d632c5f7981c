import asyncio
from typing import Optional

from fastapi import HTTPException, status

from logger.logger import logger
from models.message_model import (
    InboxView,
    MarkReadResult,
    MessageResponse,
    conversation_id_for,
)
from repos.message_repo import MessageRepository
from repos.opportunity_repo import OpportunityRepository
from repos.profile_repo import ProfileRepository
from services.conversation_aggregator import aggregate

class MessageService:
    """
    Inbox operations for the current viewer
    Validation happens before anything is written; store failures become a
    single HTTP error and are not retried.
    """

    def __init__(
        self,
        message_repo: MessageRepository,
        profile_repo: ProfileRepository,
        opportunity_repo: OpportunityRepository,
    ):
        self.message_repo = message_repo
        self.profile_repo = profile_repo
        self.opportunity_repo = opportunity_repo

    async def send_reply(
        self,
        sender_id: str,
        receiver_id: Optional[str],
        content: Optional[str],
        conversation_id: Optional[str] = None,
        related_opportunity_id: Optional[str] = None,
    ) -> MessageResponse:
        """Send a message from the viewer to receiver_id"""
        if not sender_id:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Sender is required")
        if not receiver_id or not receiver_id.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Receiver is required")
        receiver_id = receiver_id.strip()
        if receiver_id == sender_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot send message to yourself")
        if not content or not content.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message content cannot be empty")

        # A conversation belongs to exactly one pair of participants
        expected_conversation_id = conversation_id_for(sender_id, receiver_id)
        if conversation_id and conversation_id != expected_conversation_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Conversation does not belong to this sender and receiver"
            )

        message_dict = {
            "sender_id": sender_id,
            "receiver_id": receiver_id,
            "conversation_id": expected_conversation_id,
            "content": content.strip(),
            "related_opportunity_id": related_opportunity_id,
        }

        try:
            record = await self.message_repo.create_message(message_dict)
        except Exception as e:
            logger.error(f"Failed to store message from {sender_id} to {receiver_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to send message"
            )
        return MessageResponse(**record)

    async def get_inbox(self, viewer_id: Optional[str]) -> InboxView:
        """Conversations of the viewer with their threads"""
        if not viewer_id:
            return InboxView()

        try:
            records = await self.message_repo.get_messages_for_user(viewer_id)

            participant_ids = set()
            opportunity_ids = set()
            for record in records:
                participant_ids.update(
                    user_id for user_id in (record.get("sender_id"), record.get("receiver_id"))
                    if user_id and user_id != viewer_id
                )
                if record.get("related_opportunity_id"):
                    opportunity_ids.add(record["related_opportunity_id"])

            # Both lookups must finish before aggregation
            profiles, titles = await asyncio.gather(
                self.profile_repo.get_summaries(participant_ids),
                self.opportunity_repo.get_titles(list(opportunity_ids)),
            )
        except Exception as e:
            logger.error(f"Failed to load inbox for {viewer_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Failed to load messages"
            )

        for record in records:
            opportunity_id = record.get("related_opportunity_id")
            if opportunity_id:
                record["related_opportunity_title"] = titles.get(opportunity_id)

        return aggregate(records, profiles, viewer_id)

    async def mark_conversation_as_read(self, viewer_id: str, conversation_id: str) -> MarkReadResult:
        """Mark messages addressed to the viewer in a conversation as read"""
        try:
            marked = await self.message_repo.mark_conversation_as_read(conversation_id, viewer_id)
        except Exception as e:
            logger.error(f"Failed to mark conversation {conversation_id} as read for {viewer_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to mark messages as read"
            )
        return MarkReadResult(conversation_id=conversation_id, marked_count=marked)

    async def mark_message_as_read(self, viewer_id: str, message_id: str) -> MessageResponse:
        """Only the receiver of a message may mark it as read"""
        record = await self.message_repo.mark_message_as_read(message_id, viewer_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
        return MessageResponse(**record)
