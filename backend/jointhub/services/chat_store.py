"""
Chat log store.

A user's history is one ChatLog record holding the whole message array. Saves
are read-modify-write without a version check, so two concurrent appends for
the same user can race and the later write wins.
"""
import datetime as dt
from typing import List

from tortoise.exceptions import IntegrityError

from jointhub.config import settings
from jointhub.core.errors import Forbidden
from jointhub.models.chat_log import ChatLog


def _now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z")


class ChatLogStore:
    def __init__(self, limit: int | None = None):
        self.limit = limit or settings.chat_history_limit

    async def history(self, user_id: str) -> List[dict]:
        """Ordered messages for the user; empty when nothing was ever saved."""
        log = await ChatLog.get_or_none(user_id=user_id)
        return list(log.messages) if log else []

    async def append(self, user_id: str, message: dict) -> List[dict]:
        """
        Append one message, evicting the oldest entries beyond the cap.

        Returns:
            The stored message list after the append

        Raises:
            Forbidden: No such user, e.g. the account behind an old token was removed
        """
        entry = dict(message)
        if not entry.get("timestamp"):
            entry["timestamp"] = _now_iso()

        log = await ChatLog.get_or_none(user_id=user_id)
        if log is None:
            log = ChatLog(user_id=user_id, messages=[])

        messages = list(log.messages or [])
        messages.append(entry)
        while len(messages) > self.limit:
            messages.pop(0)  # FIFO: oldest goes first
        log.messages = messages
        try:
            await log.save()
        except IntegrityError:
            raise Forbidden()
        return messages

    async def clear(self, user_id: str) -> None:
        """Delete the user's log. Clearing a missing log is not an error."""
        await ChatLog.filter(user_id=user_id).delete()


# Global singleton
chat_store = ChatLogStore()
