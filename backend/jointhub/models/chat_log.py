"""
Database model for chat logs.
Each user owns at most one log, stored as a single record whose ``messages``
column holds the ordered message array.
"""
from tortoise import fields, models

class ChatLog(models.Model):
    id = fields.IntField(pk=True)
    user = fields.OneToOneField(
        "models.User",
        related_name="chat_log",
        on_delete=fields.CASCADE,
    )
    # [{"sender": "user", "text": "...", "isImage": false, "timestamp": "...Z"}, ...]
    # Insertion order is display order
    messages = fields.JSONField(default=list)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "chat_logs"
