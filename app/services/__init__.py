from app.services.conversation_service import ConversationService

__all__ = [
    "ConversationService",
]
