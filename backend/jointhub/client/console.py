"""
Console front end for the chat client.

    $ jointhub-chat
    JOINT HUB :: System Access Required
    [l]ogin or [r]egister? l
    ...

Anything typed goes through ChatController.send, so the local commands
("clear", "matrix mode", "set timer 10", "draw a cat", ...) behave exactly as
in any other UI. Lines starting with "/" are console controls: /mute, /mic,
/terminal (close the hacker terminal), /logout, /exit.
"""
import asyncio
import getpass
import logging
import os
from pathlib import Path

from .api import ClientError, JointHubClient
from .controller import OUTAGE_NOTICE, ChatController
from .state import ChatMessage, ClientSessionState


API_URL = os.getenv("JOINTHUB_API_URL", "http://localhost:3000")
SESSION_FILE = Path(os.getenv("JOINTHUB_SESSION_FILE", str(Path.home() / ".jointhub" / "session.json")))

LABELS = {"user": "you", "assistant": "liz", "system": "sys"}


def render(msg: ChatMessage) -> None:
    text = "[image: data URI omitted]" if msg.is_image else msg.text
    print(f"{LABELS.get(msg.sender, msg.sender):>4} > {text}")


async def _ask(prompt: str, secret: bool = False) -> str:
    reader = getpass.getpass if secret else input
    return (await asyncio.to_thread(reader, prompt)).strip()


async def authenticate(controller: ChatController) -> bool:
    """Prompt until logged in; False when the user gives up (empty answer)."""
    print("JOINT HUB :: System Access Required")
    while True:
        mode = (await _ask("[l]ogin or [r]egister? ")).lower()
        if not mode:
            return False
        username = await _ask("USERNAME: ")
        password = await _ask("PASSWORD: ", secret=True)
        try:
            if mode.startswith("r"):
                await controller.register(username, password)
                print("Registration successful. Please login.")
                continue
            await controller.login(username, password)
            return True
        except ClientError as e:
            print(f"!! {OUTAGE_NOTICE}" if e.is_outage else f"!! {e.message}")


async def chat_loop(controller: ChatController) -> None:
    state = controller.state
    while True:
        line = await _ask("")
        if line == "/exit":
            return
        if line == "/logout":
            controller.logout()
            if not await authenticate(controller):
                return
            for msg in state.messages:
                render(msg)
            continue
        if line == "/mute":
            print(f"(muted: {controller.toggle_mute()})")
            continue
        if line == "/terminal":
            controller.close_terminal()
            print("(terminal closed)")
            continue
        if line == "/mic":
            print(f"(listening: {controller.toggle_mic()})")
            continue
        await controller.send(line)
        if not state.messages:
            print("(history cleared)")
        state.save(SESSION_FILE)


async def main_async() -> None:
    state = ClientSessionState.load(SESSION_FILE)
    controller = ChatController(JointHubClient(API_URL), state=state, on_message=render)
    try:
        if state.user:
            try:
                await controller.fetch_history()
            except ClientError:
                controller.logout()
        if not state.user and not await authenticate(controller):
            return
        print(f"Connected as {state.user.username}.")
        for msg in state.messages:
            render(msg)
        await chat_loop(controller)
    finally:
        state.save(SESSION_FILE)
        await controller.close()


def main() -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    try:
        asyncio.run(main_async())
    except (KeyboardInterrupt, EOFError):
        pass


if __name__ == "__main__":
    main()
