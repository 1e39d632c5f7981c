"""
Builds the inbox view from a flat message log.

The aggregation is a pure two stage pipeline: messages are first partitioned
by conversation id, then every partition is reduced on its own into a
conversation summary and a chronologically ordered thread. Nothing here does
I/O; messages and profiles are fetched by the caller.
"""
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from logger.logger import logger
from models.message_model import Conversation, InboxView, MessageResponse
from models.profiles_model import ProfileSummary

MessageInput = Union[MessageResponse, Mapping[str, Any]]


def message_sort_key(message: MessageResponse) -> Tuple:
    """Chronological order with the id as a deterministic tie-break"""
    return (message.created_at, message.id)


def coerce_messages(messages: Iterable[MessageInput]) -> List[MessageResponse]:
    """Validate raw records, dropping the ones that are missing required fields"""
    valid = []
    for raw in messages or []:
        if isinstance(raw, MessageResponse):
            valid.append(raw)
            continue
        try:
            valid.append(MessageResponse.model_validate(raw))
        except ValidationError as e:
            logger.debug(f"Dropping malformed message {raw!r}: {e.error_count()} validation errors")
    return valid


def partition_messages(messages: Iterable[MessageResponse]) -> Dict[str, List[MessageResponse]]:
    """Group messages by conversation id"""
    partitions: Dict[str, List[MessageResponse]] = defaultdict(list)
    for message in messages:
        partitions[message.conversation_id].append(message)
    return dict(partitions)


def counterpart_id_for(
    conversation_id: str,
    thread: List[MessageResponse],
    viewer_id: str,
) -> Optional[str]:
    """
    The participant of a thread that is not the viewer.

    `thread` must already be in chronological order. Returns None when the
    viewer has no standing in the thread (a message they neither sent nor
    received) or when there is nobody but the viewer in it. When more than one
    other participant shows up, the one on the most recent message wins.
    """
    others = []
    for message in thread:
        if viewer_id not in (message.sender_id, message.receiver_id):
            logger.warning(
                f"Conversation {conversation_id} contains message {message.id} "
                f"not addressed to or from viewer {viewer_id}; skipping conversation"
            )
            return None
        other = message.receiver_id if message.sender_id == viewer_id else message.sender_id
        if other != viewer_id:
            others.append(other)

    if not others:
        return None

    # thread is ascending, so the last entry belongs to the most recent message
    counterpart_id = others[-1]
    if len(set(others)) > 1:
        logger.warning(
            f"Conversation {conversation_id} has several counterparts {sorted(set(others))}; "
            f"using {counterpart_id} from the most recent message"
        )
    return counterpart_id


def summarize_partition(
    conversation_id: str,
    messages: List[MessageResponse],
    profiles: Mapping[str, ProfileSummary],
    viewer_id: str,
) -> Optional[Tuple[Conversation, List[MessageResponse]]]:
    """Reduce one conversation's messages to its summary and ordered thread"""
    thread = sorted(messages, key=message_sort_key)
    counterpart_id = counterpart_id_for(conversation_id, thread, viewer_id)
    if counterpart_id is None:
        return None

    counterpart = profiles.get(counterpart_id)
    if counterpart is None:
        logger.debug(f"No profile for {counterpart_id}; hiding conversation {conversation_id}")
        return None

    unread_count = sum(
        1 for message in thread
        if message.receiver_id == viewer_id
        and message.sender_id != viewer_id
        and not message.is_read
    )

    conversation = Conversation(
        id=conversation_id,
        counterpart=counterpart,
        last_message=thread[-1],
        unread_count=unread_count,
    )
    return conversation, thread


def aggregate(
    messages: Iterable[MessageInput],
    profiles: Mapping[str, ProfileSummary],
    viewer_id: Optional[str],
) -> InboxView:
    """
    Group the viewer's messages into conversations.

    Conversations come back most recent first; every thread in
    `messages_by_conversation` is oldest first. Conversations whose
    counterpart has no profile are left out of both. Without a viewer the
    result is empty.
    """
    if not viewer_id:
        return InboxView()

    partitions = partition_messages(coerce_messages(messages))
    profiles = profiles or {}

    summaries = []
    for conversation_id, partition in partitions.items():
        summary = summarize_partition(conversation_id, partition, profiles, viewer_id)
        if summary is not None:
            summaries.append(summary)

    # newest last message first, then stable on message id and conversation id
    summaries.sort(
        key=lambda item: (
            item[0].last_message.created_at,
            item[0].last_message.id,
            item[0].id,
        ),
        reverse=True,
    )

    return InboxView(
        conversations=[conversation for conversation, _ in summaries],
        messages_by_conversation={conversation.id: thread for conversation, thread in summaries},
    )
