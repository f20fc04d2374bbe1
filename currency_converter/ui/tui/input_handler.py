from __future__ import annotations

"""Input channel and validated prompt helpers for the TUI.

Each validated prompt is a small state machine: it asks (PROMPTING),
checks the answer (VALIDATING) and either loops back with an error
message or stops (ACCEPTED). A bad answer never ends the session.
"""

from enum import Enum
from functools import partial
from pathlib import Path
from typing import Callable, Generic, Mapping, Optional, TextIO, TypeVar, Union

from rich.console import Console
from rich.markup import escape

from currency_converter.utils.errors import ValidationError
from currency_converter.utils.logging import get_logger
from currency_converter.utils.validation import (
    INVALID_AMOUNT_MESSAGE,
    INVALID_CODE_MESSAGE,
    validate_amount,
    validate_currency_code,
)

from .config import AMOUNT_PROMPT, PAUSE_PROMPT, THEME, MenuAction

logger = get_logger(__name__)

T = TypeVar("T")


class InputChannel:
    """Line-oriented user input, acquired once and released once.

    Reads from the terminal through the Rich console by default, or from
    ``stream`` (e.g. a script file) when given. Raises EOFError when the
    input is exhausted or the channel has been closed.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None,
        owns_stream: bool = False,
    ) -> None:
        self.console = console or Console()
        self._stream = stream
        self._owns_stream = owns_stream
        self._closed = False

    @classmethod
    def from_path(cls, path: Union[str, Path], console: Optional[Console] = None) -> "InputChannel":
        stream = open(path, "r", encoding="utf-8")
        return cls(console=console, stream=stream, owns_stream=True)

    @property
    def closed(self) -> bool:
        return self._closed

    def ask(self, prompt: str) -> str:
        if self._closed:
            raise EOFError("input channel is closed")
        if self._stream is None:
            return self.console.input(f"[{THEME.primary}]{escape(prompt)}[/]")

        self.console.print(f"[{THEME.primary}]{escape(prompt)}[/]", end="")
        line = self._stream.readline()
        if not line:
            raise EOFError("end of scripted input")
        line = line.rstrip("\r\n")
        self.console.print(line, markup=False, highlight=False)
        return line

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_stream and self._stream is not None:
            self._stream.close()
        logger.debug("Input channel closed")

    def __enter__(self) -> "InputChannel":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


class PromptState(Enum):
    PROMPTING = "prompting"
    VALIDATING = "validating"
    ACCEPTED = "accepted"


class ValidatedPrompt(Generic[T]):
    """Ask until ``validate`` accepts the answer."""

    def __init__(
        self,
        channel: InputChannel,
        prompt: str,
        validate: Callable[[str], T],
        error_message: str,
    ) -> None:
        self.channel = channel
        self.prompt = prompt
        self.validate = validate
        self.error_message = error_message
        self.state = PromptState.PROMPTING
        self.rejections = 0

    def run(self) -> T:
        raw = ""
        value: Optional[T] = None
        while self.state is not PromptState.ACCEPTED:
            if self.state is PromptState.PROMPTING:
                raw = self.channel.ask(self.prompt)
                self.state = PromptState.VALIDATING
            else:
                try:
                    value = self.validate(raw)
                except ValidationError as e:
                    logger.debug(f"Rejected input: {e}")
                    self.rejections += 1
                    self.channel.console.print(f"[{THEME.error}]{escape(self.error_message)}[/]")
                    self.state = PromptState.PROMPTING
                else:
                    self.state = PromptState.ACCEPTED
        return value  # type: ignore[return-value]


def prompt_currency(channel: InputChannel, rates: Mapping[str, float], prompt: str) -> str:
    return ValidatedPrompt(
        channel, prompt, partial(validate_currency_code, rates), INVALID_CODE_MESSAGE
    ).run()


def prompt_amount(channel: InputChannel, prompt: str = AMOUNT_PROMPT) -> float:
    return ValidatedPrompt(channel, prompt, validate_amount, INVALID_AMOUNT_MESSAGE).run()


def parse_choice(raw: str) -> Optional[MenuAction]:
    try:
        return MenuAction(raw.strip())
    except ValueError:
        return None


def pause(channel: InputChannel) -> None:
    channel.ask(PAUSE_PROMPT)
