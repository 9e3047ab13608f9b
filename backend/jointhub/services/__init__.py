"""
Services Module

- credentials: account registration and password verification
- chat_store: capped per-user chat logs
- generation: text (Gemini) and image (OpenAI) generation proxy
"""
from .chat_store import ChatLogStore, chat_store
from .generation import GenerationGateway, generation_gateway

__all__ = [
    "ChatLogStore",
    "chat_store",
    "GenerationGateway",
    "generation_gateway",
]
