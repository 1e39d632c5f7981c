import random

from conftest import at, make_message
from models.enums import RoleKind
from models.message_model import InboxView
from models.profiles_model import ProfileSummary
from services.conversation_aggregator import (
    aggregate,
    coerce_messages,
    counterpart_id_for,
    partition_messages,
)


def test_no_viewer_returns_empty_view(profiles):
    messages = [make_message("m1", "alice", "bob", 0)]

    assert aggregate(messages, profiles, None) == InboxView()
    assert aggregate(messages, profiles, "") == InboxView()


def test_empty_log_returns_empty_view(profiles):
    view = aggregate([], profiles, "alice")

    assert view.conversations == []
    assert view.messages_by_conversation == {}


def test_two_party_conversation():
    """alice writes to bob, bob answers twice and alice has read only the last answer"""

    bob = ProfileSummary(id="bob", display_name="Bob Builder", role_kind=RoleKind.APPLICANT)
    messages = [
        make_message("m3", "bob", "alice", 10, is_read=True),
        make_message("m1", "alice", "bob", 0),
        make_message("m2", "bob", "alice", 5),
    ]

    view = aggregate(messages, {"bob": bob}, "alice")

    assert len(view.conversations) == 1
    conversation = view.conversations[0]
    assert conversation.id == "alice:bob"
    assert conversation.counterpart == bob
    assert conversation.last_message.id == "m3"
    assert conversation.unread_count == 1
    assert [m.id for m in view.messages_by_conversation["alice:bob"]] == ["m1", "m2", "m3"]


def test_conversations_sorted_by_most_recent_message(profiles):
    messages = [
        make_message("b1", "bob", "alice", 15),
        make_message("c1", "alice", "carol", 30),
        make_message("d1", "dave", "alice", 5),
    ]

    view = aggregate(messages, profiles, "alice")

    assert [c.last_message.created_at for c in view.conversations] == [at(30), at(15), at(5)]
    assert [c.counterpart.id for c in view.conversations] == ["carol", "bob", "dave"]


def test_ties_on_created_at_are_broken_by_id(profiles):
    messages = [
        make_message("m2", "bob", "alice", 0),
        make_message("m1", "alice", "bob", 0),
        make_message("x1", "alice", "dave", 0),
    ]

    view = aggregate(messages, profiles, "alice")

    assert [m.id for m in view.messages_by_conversation["alice:bob"]] == ["m1", "m2"]
    # x1 > m2, so the dave conversation comes first when descending
    assert [c.id for c in view.conversations] == ["alice:dave", "alice:bob"]


def test_conversation_without_profile_is_dropped_everywhere(profiles):
    messages = [
        make_message("m1", "alice", "bob", 0),
        make_message("m2", "ghost", "alice", 20),
    ]

    view = aggregate(messages, profiles, "alice")

    assert [c.id for c in view.conversations] == ["alice:bob"]
    assert "alice:ghost" not in view.messages_by_conversation


def test_unread_only_counts_messages_received_by_viewer(profiles):
    messages = [
        make_message("m1", "alice", "bob", 0),  # sent by viewer, unread by bob
        make_message("m2", "bob", "alice", 1),
        make_message("m3", "bob", "alice", 2),
        make_message("m4", "bob", "alice", 3, is_read=True),
    ]

    view = aggregate(messages, profiles, "alice")

    assert view.conversations[0].unread_count == 2


def test_aggregate_is_deterministic_and_order_independent(profiles):
    messages = [
        make_message("m1", "alice", "bob", 0),
        make_message("m2", "bob", "alice", 5),
        make_message("c1", "carol", "alice", 7),
        make_message("c2", "alice", "carol", 9, is_read=True),
        make_message("d1", "dave", "alice", 3),
    ]
    expected = aggregate(messages, profiles, "alice")

    shuffled = list(messages)
    random.Random(4).shuffle(shuffled)

    assert aggregate(messages, profiles, "alice") == expected
    assert aggregate(shuffled, profiles, "alice") == expected


def test_every_valid_message_lands_in_exactly_one_thread(profiles):
    messages = [
        make_message("m1", "alice", "bob", 0),
        make_message("m2", "bob", "alice", 5),
        make_message("c1", "carol", "alice", 7),
        make_message("d1", "dave", "alice", 3),
        make_message("d2", "alice", "dave", 4),
    ]

    view = aggregate(messages, profiles, "alice")

    threaded = [m.id for thread in view.messages_by_conversation.values() for m in thread]
    assert sorted(threaded) == sorted(m["id"] for m in messages)
    for conversation in view.conversations:
        thread = view.messages_by_conversation[conversation.id]
        received = sum(1 for m in thread if m.receiver_id == "alice")
        assert 0 <= conversation.unread_count <= received
        assert conversation.last_message == thread[-1]
        assert all(m.conversation_id == conversation.id for m in thread)


def test_malformed_records_are_dropped(profiles):
    broken = make_message("m2", "bob", "alice", 5)
    del broken["created_at"]
    messages = [
        make_message("m1", "alice", "bob", 0),
        broken,
        {"id": "m3", "sender_id": "bob"},
    ]

    view = aggregate(messages, profiles, "alice")

    assert [m.id for m in view.messages_by_conversation["alice:bob"]] == ["m1"]
    assert len(coerce_messages(messages)) == 1


def test_conversation_with_foreign_message_is_excluded(profiles):
    messages = [
        make_message("m1", "alice", "bob", 0),
        # same conversation id but alice is not a participant
        make_message("m2", "bob", "dave", 5, conversation_id="alice:bob"),
        make_message("c1", "carol", "alice", 1),
    ]

    view = aggregate(messages, profiles, "alice")

    assert [c.id for c in view.conversations] == ["alice:carol"]


def test_most_recent_counterpart_wins(profiles):
    messages = [
        make_message("m1", "alice", "bob", 0, conversation_id="thread-1"),
        make_message("m2", "dave", "alice", 5, conversation_id="thread-1"),
    ]

    view = aggregate(messages, profiles, "alice")

    assert view.conversations[0].counterpart.id == "dave"
    assert len(view.messages_by_conversation["thread-1"]) == 2


def test_messages_to_self_have_no_counterpart():
    thread = coerce_messages([make_message("m1", "alice", "alice", 0)])

    assert counterpart_id_for("alice:alice", thread, "alice") is None


def test_partition_groups_by_conversation_id():
    messages = coerce_messages([
        make_message("m1", "alice", "bob", 0),
        make_message("m2", "bob", "alice", 1),
        make_message("c1", "alice", "carol", 2),
    ])

    partitions = partition_messages(messages)

    assert {key: [m.id for m in value] for key, value in partitions.items()} == {
        "alice:bob": ["m1", "m2"],
        "alice:carol": ["c1"],
    }


def test_opportunity_title_is_carried_on_messages(profiles):
    messages = [
        make_message(
            "m1", "carol", "alice", 0,
            related_opportunity_id="opp-1",
            related_opportunity_title="Backend Intern",
        ),
    ]

    view = aggregate(messages, profiles, "alice")

    last = view.conversations[0].last_message
    assert last.related_opportunity_id == "opp-1"
    assert last.related_opportunity_title == "Backend Intern"
