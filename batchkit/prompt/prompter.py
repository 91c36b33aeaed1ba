"""
Prompt adapters: interactive console and pre-answered scripted input.
"""
from collections import deque
from typing import Callable, Iterable, Optional, Sequence
import logging

from ..core.errors import ConfigurationError
from ..core.interfaces import IPrompter

logger = logging.getLogger(__name__)

YES = {"y", "yes"}
NO = {"n", "no"}


class ConsolePrompter(IPrompter):
    """Asks on the terminal, repeating the question until the answer parses."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
        assume_yes: bool = False
    ):
        self.input_func = input_func
        self.output_func = output_func
        self.assume_yes = assume_yes

    def _read(self, prompt: str, default=None) -> str:
        suffix = f" [{default}]" if default is not None else ""
        answer = self.input_func(f"{prompt}{suffix}: ").strip()
        if not answer and default is not None:
            return str(default)
        return answer

    def ask_string(self, prompt: str, default: Optional[str] = None) -> str:
        while True:
            answer = self._read(prompt, default)
            if answer:
                return answer

    def ask_int(self, prompt: str, default: Optional[int] = None) -> int:
        while True:
            answer = self._read(prompt, default)
            try:
                return int(answer)
            except ValueError:
                self.output_func(f"Not a number: {answer!r}")

    def ask_yes_no(self, prompt: str) -> bool:
        while True:
            answer = self._read(f"{prompt} (y/n)").lower()
            if answer in YES:
                return True
            if answer in NO:
                return False
            self.output_func("Please answer y or n")

    def ask_confirm(self, prompt: str) -> bool:
        if self.assume_yes:
            return True
        return self.ask_yes_no(prompt)

    def ask_choice(
        self,
        prompt: str,
        choices: Sequence[str],
        default: Optional[str] = None
    ) -> str:
        choices = [str(c) for c in choices]
        while True:
            answer = self._read(f"{prompt} ({'/'.join(choices)})", default)
            if answer in choices:
                return answer
            self.output_func(f"Choose one of: {', '.join(choices)}")


class ScriptedPrompter(IPrompter):
    """
    Answers questions from a prepared sequence, falling back to defaults.

    Example:
        prompter = ScriptedPrompter(["60", "90", "y"])
    """

    def __init__(self, answers: Iterable = (), assume_yes: bool = False):
        self.answers = deque(answers)
        self.assume_yes = assume_yes
        self.asked = []

    def _next(self, prompt: str, default=None):
        self.asked.append(prompt)
        if self.answers:
            return self.answers.popleft()
        if default is not None:
            return default
        raise ValueError(f"No answer available for prompt: {prompt}")

    def ask_string(self, prompt: str, default: Optional[str] = None) -> str:
        return str(self._next(prompt, default))

    def ask_int(self, prompt: str, default: Optional[int] = None) -> int:
        return int(self._next(prompt, default))

    def _yes(self, prompt: str, default: str) -> bool:
        answer = self._next(prompt, default)
        if isinstance(answer, bool):
            return answer
        return str(answer).strip().lower() in YES

    def ask_yes_no(self, prompt: str) -> bool:
        return self._yes(prompt, "n")

    def ask_confirm(self, prompt: str) -> bool:
        return self._yes(prompt, "y" if self.assume_yes else "n")

    def ask_choice(
        self,
        prompt: str,
        choices: Sequence[str],
        default: Optional[str] = None
    ) -> str:
        answer = str(self._next(prompt, default))
        if answer not in [str(c) for c in choices]:
            raise ConfigurationError(prompt, answer, choices)
        return answer
