"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: User account and authentication model
- ChatLog: Capped per-user message log
"""
from .user import User
from .chat_log import ChatLog
