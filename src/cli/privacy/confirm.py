"""Operator confirmation for irreversible operations."""

from enum import Enum
from typing import Callable, Iterable, Optional

from rich.console import Console
from rich.markup import escape


CONFIRMATION_TOKEN = 'OK'


class Decision(Enum):
    """Outcome of asking the operator to confirm one operation."""

    APPROVED = 'approved'
    DECLINED = 'declined'

    @property
    def is_approved(self) -> bool:
        return self is Decision.APPROVED


class ScriptedAnswers:
    """Answer source that replays canned answers, one per prompt.

    Once the answers run out every further prompt reads as end of input.
    """

    def __init__(self, answers: Iterable[str]):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


class ConfirmationGate:
    """
    Asks the operator to approve each destructive operation.

    Only the exact literal ``OK`` approves. Every call is independent of the
    previous ones, so declining one operation never affects the next.
    In non-interactive mode every operation is approved without any I/O.
    """

    def __init__(self, console: Console, non_interactive: bool = False,
                 ask: Optional[Callable[[str], str]] = None):
        self.console = console
        self.non_interactive = non_interactive
        self.ask = ask or console.input

    def prompt_text(self, action: str, start: str, end: str) -> str:
        return (f'[bold yellow]Are you sure you want to {escape(action)} for all visits between '
                f'"{start}" to "{end}"? This action cannot be undone. '
                f'Type "{CONFIRMATION_TOKEN}" to confirm this section.[/] ')

    def confirm(self, action: str, start: str, end: str) -> Decision:
        if self.non_interactive:
            return Decision.APPROVED

        try:
            answer = self.ask(self.prompt_text(action, start, end))
        except EOFError:
            self.console.print()
            return Decision.DECLINED

        if answer == CONFIRMATION_TOKEN:
            return Decision.APPROVED
        return Decision.DECLINED
