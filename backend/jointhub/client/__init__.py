"""
Chat client for the JOINT HUB API.

- api: HTTP client (JointHubClient) and ClientError
- state: serializable client session state
- controller: message flow and local command dispatch
- effects: speech / visual effect capability interface
- console: terminal front end (``jointhub-chat``)
"""
from .api import ClientError, JointHubClient
from .controller import ChatController
from .effects import EffectSet, SpeechInput, SpeechOutput, VisualEffect
from .state import ChatMessage, ClientSessionState, UserSession

__all__ = [
    "ClientError",
    "JointHubClient",
    "ChatController",
    "EffectSet",
    "SpeechInput",
    "SpeechOutput",
    "VisualEffect",
    "ChatMessage",
    "ClientSessionState",
    "UserSession",
]
