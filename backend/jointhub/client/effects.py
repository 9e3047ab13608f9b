"""
Presentation effects behind a small capability interface.

The chat controller only knows three kinds of effect:
- SpeechOutput: read assistant replies aloud
- SpeechInput: turn the microphone into transcripts
- VisualEffect: anything drawn over the UI (matrix rain, audio visualizer, glitch)

The implementations here log instead of touching audio or graphics hardware,
so the controller runs anywhere; a real UI swaps in its own.
"""
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

logger = logging.getLogger("jointhub.client")


def clean_speech_text(text: str) -> str:
    """Strip markdown emphasis and replace inline images before speaking."""
    text = re.sub(r"!\[.*?\]\(.*?\)", "Image generated.", text)
    return re.sub(r"[*#]", "", text)


class Effect(ABC):
    """Effect Abstract Base Class"""

    active: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def start(self) -> None:
        self.active = True

    def stop(self) -> None:
        self.active = False


class SpeechOutput(Effect):
    @abstractmethod
    def speak(self, text: str) -> None:
        """Say ``text``, interrupting anything still being spoken."""
        pass


class SpeechInput(Effect):
    def __init__(self):
        self._on_result: Optional[Callable[[str], None]] = None

    def set_handler(self, on_result: Callable[[str], None]) -> None:
        self._on_result = on_result

    def emit(self, transcript: str) -> None:
        """Deliver one recognized utterance while listening."""
        transcript = transcript.strip()
        if self.active and transcript and self._on_result:
            self._on_result(transcript)


class VisualEffect(Effect):
    pass


class LoggingSpeechOutput(SpeechOutput):
    def __init__(self, pitch: float = 1.15, rate: float = 1.1):
        self.pitch = pitch
        self.rate = rate
        self.last_spoken: Optional[str] = None

    @property
    def name(self) -> str:
        return "speech-output"

    def speak(self, text: str) -> None:
        self.last_spoken = clean_speech_text(text)
        logger.debug("[speech] (pitch=%.2f rate=%.2f) %s", self.pitch, self.rate, self.last_spoken)


class ManualSpeechInput(SpeechInput):
    """Speech input fed by the host through ``emit``; no microphone involved."""

    @property
    def name(self) -> str:
        return "speech-input"


class LoggingVisualEffect(VisualEffect):
    def __init__(self, name: str):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def start(self) -> None:
        super().start()
        logger.debug("[effect] %s on", self._name)

    def stop(self) -> None:
        super().stop()
        logger.debug("[effect] %s off", self._name)


def _default_visuals() -> Dict[str, VisualEffect]:
    return {name: LoggingVisualEffect(name) for name in ("matrix", "visualizer", "glitch")}


@dataclass
class EffectSet:
    speech_output: SpeechOutput = field(default_factory=LoggingSpeechOutput)
    speech_input: SpeechInput = field(default_factory=ManualSpeechInput)
    visuals: Dict[str, VisualEffect] = field(default_factory=_default_visuals)

    def visual(self, name: str) -> Optional[VisualEffect]:
        return self.visuals.get(name)

    def stop_all(self) -> None:
        self.speech_input.stop()
        for effect in self.visuals.values():
            effect.stop()
