"""
Client session state.

Everything the chat UI toggles lives on one serializable object, so a session
can be written to disk between runs and tests can assert on transitions
without driving a real UI.
"""
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

THEMES = ["theme-solar", "theme-ocean", "theme-forest", "theme-royal", ""]
EMOJIS = ["✨", "🚀", "💻", "🔥", "🤖", "💖", "👀", "💅", "🎮", "🧠"]

TERMINAL_BANNER = "System initializing...\n> Accessing Liz Core...\n> Connected.\n_"


@dataclass
class ChatMessage:
    sender: str  # "user" | "assistant" | "system"
    text: str
    is_image: bool = False
    timestamp: Optional[str] = None

    def to_api(self) -> dict:
        """Wire shape accepted by /api/chat/save."""
        return {"sender": self.sender, "text": self.text, "isImage": self.is_image}

    @classmethod
    def from_api(cls, data: dict) -> "ChatMessage":
        return cls(
            sender=data.get("sender", "assistant"),
            text=data.get("text", ""),
            is_image=bool(data.get("isImage", False)),
            timestamp=data.get("timestamp"),
        )


@dataclass
class UserSession:
    username: str
    token: str


@dataclass
class ClientSessionState:
    user: Optional[UserSession] = None
    messages: List[ChatMessage] = field(default_factory=list)
    loading: bool = False
    muted: bool = False
    listening: bool = False
    convo_mode: bool = False
    matrix_active: bool = False
    terminal_open: bool = False
    glitch_mode: bool = False
    theme: str = ""
    timer: Optional[int] = None  # Seconds left on the countdown, None when idle
    terminal_content: str = TERMINAL_BANNER

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ClientSessionState":
        data = dict(data)
        user = data.pop("user", None)
        messages = data.pop("messages", None) or []
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(
            user=UserSession(**user) if user else None,
            messages=[
                ChatMessage(**m) if "is_image" in m else ChatMessage.from_api(m)
                for m in messages
            ],
            **known,
        )

    def save(self, path: Path) -> None:
        """Persist the session (user, history and toggles) as JSON."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "ClientSessionState":
        """Read a saved session; a missing or unreadable file gives a fresh one."""
        try:
            return cls.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError, TypeError):
            return cls()
