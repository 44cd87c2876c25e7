"""Tests for ConversationService."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

from app.core.store import ConversationStore
from app.schemas.relay import Direction, Language, Message, MessageDraft, MessageStatus
from app.services.conversation_service import ConversationService


def _inbound(chat_id: str, text: str) -> MessageDraft:
    return MessageDraft(
        chat_id=chat_id,
        external_message_id=1,
        sender_id=int(chat_id),
        direction=Direction.INBOUND,
        original_text=text,
        translated_text=text,
        language=Language.KO,
        status=MessageStatus.SENT,
    )


def test_list_messages_sorted_by_created_at_regardless_of_store_order():
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    out_of_order = [
        Message(
            **_inbound("5", text).model_dump(),
            id=uuid4(),
            created_at=base + timedelta(seconds=offset),
        )
        for text, offset in [("second", 2), ("first", 1), ("third", 3)]
    ]
    store = MagicMock(spec=ConversationStore)
    store.messages_for.return_value = out_of_order

    messages = ConversationService(store).list_messages("5")

    assert [m.original_text for m in messages] == ["first", "second", "third"]
    store.messages_for.assert_called_once_with("5")


def test_list_messages_unknown_chat(store: ConversationStore):
    assert ConversationService(store).list_messages("404") == []


def test_list_conversations_reflects_store(store: ConversationStore):
    store.append(_inbound("1", "a"))
    store.append(_inbound("2", "b"))
    store.append(_inbound("2", "c"))
    service = ConversationService(store)

    conversations = service.list_conversations()

    assert len(conversations) == 2
    assert conversations[0].chat_id == "2"
    assert conversations[0].message_count == 2


def test_projection_has_no_side_effects(store: ConversationStore):
    store.append(_inbound("1", "a"))
    service = ConversationService(store)
    first = (service.list_conversations(), service.list_messages("1"))
    second = (service.list_conversations(), service.list_messages("1"))
    assert first == second
    assert len(store) == 1
