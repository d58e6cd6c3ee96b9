"""Interactive input for the CLI layer.

:class:`QuestionaryInputProvider` satisfies the
:class:`~cratectl.core.protocols.InputProvider` protocol with
questionary text and select prompts.  The command handlers only see the
protocol, so tests drive them with a scripted provider instead of a
terminal.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from cratectl.core.protocols import InputProvider
from cratectl.exceptions import EnvironmentError, PromptCancelledError, UsageError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class QuestionaryInputProvider:
    """Prompts the user through questionary.

    ``ask()`` returns ``None`` on Ctrl+C / Esc; both are reported as
    :class:`PromptCancelledError`.
    """

    def read_line(self, prompt: str, *, default: str = "") -> str:
        questionary = _import_questionary()
        answer: str | None = questionary.text(prompt, default=default).ask()
        if answer is None:
            raise PromptCancelledError("Prompt cancelled.")
        return answer.strip()

    def choose(self, prompt: str, choices: Sequence[str]) -> str:
        questionary = _import_questionary()
        answer: str | None = questionary.select(
            prompt,
            choices=list(choices),
            use_arrow_keys=True,
            use_shortcuts=False,
        ).ask()
        if answer is None:
            raise PromptCancelledError(
                "No option selected.",
                hint="Use arrow keys to pick an option, then press Enter.",
            )
        return answer


def require_answer(inputs: InputProvider, prompt: str, field: str) -> str:
    """Ask *prompt* through *inputs* and reject a blank answer."""
    answer = inputs.read_line(prompt)
    if not answer:
        raise UsageError(f"The {field} must not be empty.")
    return answer
