from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from boundjson.core.logger import get_logger

logger = get_logger(__name__)

GRUMPY_REPLY = "Go away!"


class Message(str):
    pass


class GrumpyGreeterError(RuntimeError):
    def __init__(self) -> None:
        super().__init__("could not create event: event greeter is grumpy")


@dataclass(frozen=True)
class Greeter:
    message: Message
    grumpy: bool = False

    def greet(self) -> Message:
        if self.grumpy:
            return Message(GRUMPY_REPLY)
        return self.message


@dataclass(frozen=True)
class Event:
    greeter: Greeter

    def start(self) -> Message:
        msg = self.greeter.greet()
        logger.info("greeter.event.start", greeting=str(msg))
        return msg


def _now() -> float:
    return time.time()


def new_message(phrase: str) -> Message:
    return Message(phrase)


def new_greeter(message: Message, clock: Callable[[], float] | None = None) -> Greeter:
    """Greeters created on an even second are grumpy."""
    seconds = int((clock or _now)())
    return Greeter(message=message, grumpy=seconds % 2 == 0)


def new_event(greeter: Greeter) -> Event:
    if greeter.grumpy:
        raise GrumpyGreeterError()
    return Event(greeter=greeter)
