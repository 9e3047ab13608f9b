"""
Chat controller: the client's message flow and local command dispatch.

Input goes through three paths:
1. Local commands (clear, mode toggles, theme roulette, timer) never reach a model
2. Image prompts ("generate ...", "draw ...", "create image ...") go to the image endpoint
3. Everything else goes to the text endpoint with the last 5 messages as context

Failures on any path become assistant messages, never exceptions.
"""
import asyncio
import logging
import random
import re
from typing import Callable, List, Optional, Set

from .api import ClientError, JointHubClient
from .effects import EffectSet
from .state import EMOJIS, THEMES, ChatMessage, ClientSessionState, UserSession

logger = logging.getLogger("jointhub.client")

PERSONA = (
    "You are Liz, Admin of JOINT HUB. Created by Skiller. You are intelligent, lively, "
    "and respect Skiller. Short answers preferred. Secret code: 254."
)
CONTEXT_WINDOW = 5
OUTAGE_NOTICE = "Hub datastore offline. History and saves are unavailable until it reconnects."

IMAGE_PREFIX = re.compile(r"^(generate|draw|create image)\s+", re.IGNORECASE)
IMAGE_STARTS = ("generate", "draw", "create image")

MessageListener = Callable[[ChatMessage], None]


class ChatController:
    def __init__(
        self,
        api: JointHubClient,
        state: Optional[ClientSessionState] = None,
        effects: Optional[EffectSet] = None,
        rng: Optional[random.Random] = None,
        tick_seconds: float = 1.0,
        on_message: Optional[MessageListener] = None,
    ):
        self.api = api
        self.state = state or ClientSessionState()
        self.effects = effects or EffectSet()
        self.rng = rng or random.Random()
        self.tick_seconds = tick_seconds
        self.on_message = on_message
        self._timer_task: Optional[asyncio.Task] = None
        self._pending: Set[asyncio.Task] = set()

        if self.state.user:
            self.api.token = self.state.user.token
        self.effects.speech_input.set_handler(self._on_transcript)

    # -------- auth --------
    async def register(self, username: str, password: str) -> str:
        return await self.api.register(username, password)

    async def login(self, username: str, password: str) -> UserSession:
        body = await self.api.login(username, password)
        self.state.user = UserSession(username=body["username"], token=body["token"])
        await self.fetch_history()
        return self.state.user

    def logout(self) -> None:
        self.state.user = None
        self.state.messages = []
        self.api.token = None

    async def fetch_history(self) -> List[ChatMessage]:
        if not self.state.user:
            return []
        try:
            self.state.messages = await self.api.history()
        except ClientError as e:
            if e.is_auth_failure:
                raise
            logger.error("Failed to fetch history: %s", e.message)
            if e.is_outage:
                await self.add_message(OUTAGE_NOTICE, "system")
        except Exception as e:
            logger.error("Failed to fetch history: %s", e)
        return self.state.messages

    # -------- messages --------
    async def add_message(self, text: str, sender: str, is_image: bool = False) -> ChatMessage:
        """Append locally, persist unless it is a system line, speak assistant replies."""
        msg = ChatMessage(sender=sender, text=text, is_image=is_image)
        self.state.messages.append(msg)
        if self.on_message:
            self.on_message(msg)
        if sender != "system":
            await self._save(msg)
        if sender == "assistant" and not self.state.muted:
            self.effects.speech_output.speak("Image generated." if is_image else text)
        return msg

    async def _save(self, msg: ChatMessage) -> None:
        if not self.state.user:
            return
        try:
            await self.api.save_message(msg)
        except ClientError as e:
            if e.is_outage:
                logger.warning("Datastore offline, message kept locally only")
            else:
                logger.error("Failed to save message: %s", e.message)
        except Exception as e:
            logger.error("Failed to save message: %s", e)

    async def send(self, text: str) -> None:
        text = (text or "").strip()
        if not text or self.state.loading:
            return
        prior = list(self.state.messages)
        await self.add_message(text, "user")
        await self.process_input(text, prior)

    async def process_input(self, text: str, prior: Optional[List[ChatMessage]] = None) -> None:
        """
        Run one line of input through command dispatch or generation.

        ``prior`` is the conversation before this input; it defaults to the
        current message list.
        """
        self.state.loading = True
        try:
            lower = text.lower()
            if await self._run_command(text, lower):
                return
            if lower.startswith(IMAGE_STARTS):
                await self._generate_image(text)
                return
            await self._generate_text(text, self.state.messages if prior is None else prior)
        finally:
            self.state.loading = False

    # -------- local commands --------
    async def _run_command(self, text: str, lower: str) -> bool:
        if lower == "clear":
            try:
                await self.api.clear()
            except Exception as e:
                logger.warning("Failed to clear history: %s", e)
            self.state.messages = []
            return True

        if "convo mode" in lower:
            self.state.convo_mode = not self.state.convo_mode
            self._set_visual("visualizer", self.state.convo_mode)
            if self.state.convo_mode:
                await self.add_message("Conversation mode active. I'm all ears. 🎙️", "assistant")
            else:
                await self.add_message("Conversation mode disabled.", "assistant")
            return True

        if "matrix mode" in lower:
            self.state.matrix_active = not self.state.matrix_active
            self._set_visual("matrix", self.state.matrix_active)
            if self.state.matrix_active:
                await self.add_message("Entering the Matrix.", "assistant")
            else:
                await self.add_message("Matrix disconnected.", "assistant")
            return True

        if "hacker terminal" in lower:
            self.state.terminal_open = True
            await self.add_message("Accessing root mainframe...", "assistant")
            return True

        if "cyber psychosis" in lower:
            self.state.glitch_mode = not self.state.glitch_mode
            self._set_visual("glitch", self.state.glitch_mode)
            await self.add_message("Reality distorted.", "assistant")
            return True

        if "theme roulette" in lower:
            self.state.theme = self.rng.choice(THEMES)
            await self.add_message("Visual theme reconfigured.", "assistant")
            return True

        if "set timer" in lower:
            match = re.search(r"\d+", text)
            seconds = int(match.group(0)) if match else 0
            if seconds > 0:
                self.start_timer(seconds)
                await self.add_message(f"Timer set for {seconds} seconds. ⏳", "assistant")
            else:
                await self.add_message("Please specify a valid time.", "assistant")
            return True

        return False

    def _set_visual(self, name: str, on: bool) -> None:
        effect = self.effects.visual(name)
        if effect is None:
            return
        if on:
            effect.start()
        else:
            effect.stop()

    def close_terminal(self) -> None:
        self.state.terminal_open = False

    def start_timer(self, seconds: int) -> None:
        if self._timer_task and not self._timer_task.done():
            self._timer_task.cancel()
        self.state.timer = seconds
        self._timer_task = asyncio.create_task(self._countdown())

    async def _countdown(self) -> None:
        while self.state.timer and self.state.timer > 1:
            await asyncio.sleep(self.tick_seconds)
            self.state.timer -= 1
        await asyncio.sleep(self.tick_seconds)
        self.state.timer = None
        await self.add_message("Timer complete! 🚨", "assistant")

    # -------- generation --------
    async def _generate_image(self, text: str) -> None:
        prompt = IMAGE_PREFIX.sub("", text, count=1)
        try:
            image = await self.api.generate_image(prompt)
        except ClientError as e:
            logger.warning("Image generation failed: %s", e.message)
            image = None
        except Exception as e:
            logger.error("Image generation error: %s", e)
            await self.add_message("Critical error in image generation.", "assistant")
            return
        if image:
            await self.add_message(f"data:image/png;base64,{image}", "assistant", is_image=True)
        else:
            await self.add_message("Visual render failed.", "assistant")

    def build_contents(self, text: str, prior: List[ChatMessage]) -> List[dict]:
        """The last CONTEXT_WINDOW messages as model turns, then the new input."""
        contents = [
            {
                "role": "user" if m.sender == "user" else "model",
                "parts": [{"text": "[image]" if m.is_image else m.text}],
            }
            for m in prior[-CONTEXT_WINDOW:]
        ]
        contents.append({"role": "user", "parts": [{"text": text}]})
        return contents

    async def _generate_text(self, text: str, prior: List[ChatMessage]) -> None:
        try:
            reply = await self.api.generate_text(self.build_contents(text, prior), PERSONA)
        except ClientError as e:
            # The API answered but had no candidate to give
            logger.warning("Text generation failed: %s", e.message)
            reply = None
        except Exception as e:
            logger.error("Text generation error: %s", e)
            await self.add_message("A critical system error occurred.", "assistant")
            return
        emoji = self.rng.choice(EMOJIS)
        await self.add_message(f"{reply or 'Data corruption detected.'} {emoji}", "assistant")

    # -------- voice --------
    def toggle_mic(self) -> bool:
        if self.state.listening:
            self.effects.speech_input.stop()
        else:
            self.effects.speech_input.start()
        self.state.listening = not self.state.listening
        return self.state.listening

    def toggle_mute(self) -> bool:
        self.state.muted = not self.state.muted
        return self.state.muted

    def _on_transcript(self, transcript: str) -> None:
        if not self.state.convo_mode:
            return
        task = asyncio.create_task(self.send(transcript))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def close(self) -> None:
        if self._timer_task and not self._timer_task.done():
            self._timer_task.cancel()
        self.effects.stop_all()
        await self.api.aclose()
