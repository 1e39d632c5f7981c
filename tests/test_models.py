from datetime import datetime, timezone

from mappers.messages_mapper import message_doc_to_record
from models.enums import RoleKind
from models.message_model import MessageResponse, conversation_id_for
from models.profiles_model import DEFAULT_DISPLAY_NAME, resolve_display_name


def test_conversation_id_is_symmetric():
    assert conversation_id_for("bob", "alice") == "alice:bob"
    assert conversation_id_for("alice", "bob") == "alice:bob"


def test_company_is_shown_by_company_name():
    assert resolve_display_name(RoleKind.ORGANIZATION, "Carol Smith", "Carol Inc") == "Carol Inc"


def test_applicant_is_shown_by_full_name():
    assert resolve_display_name(RoleKind.APPLICANT, "Alice Doe", "Acme") == "Alice Doe"


def test_blank_names_fall_back():
    assert resolve_display_name(RoleKind.ORGANIZATION, "Carol Smith", "  ") == "Carol Smith"
    assert resolve_display_name(RoleKind.APPLICANT, None, None) == DEFAULT_DISPLAY_NAME


def test_naive_timestamps_are_read_as_utc():
    message = MessageResponse(
        id="m1",
        sender_id="alice",
        receiver_id="bob",
        conversation_id="alice:bob",
        content="hi",
        created_at=datetime(2024, 3, 1, 12, 0),
    )

    assert message.created_at == datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_legacy_message_document_is_normalized():
    record = message_doc_to_record({
        "_id": "65f000000000000000000001",
        "sender_id": "bob",
        "receiver_id": "alice",
        "content": "hi",
        "read": True,
    })

    assert record["id"] == "65f000000000000000000001"
    assert record["conversation_id"] == "alice:bob"
    assert record["is_read"] is True
    assert "_id" not in record
