"""Interactive prompt helpers built on InquirerPy."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable, Protocol, Sequence

from InquirerPy import inquirer
from InquirerPy.base.control import Choice

from .exceptions import UserAbort
from .models import CommitType, is_valid_scope

NO_SCOPE = ""


class Prompter(Protocol):
    """Questions a workflow may ask the operator."""

    def ask_subject(self) -> str: ...

    def ask_type(self, types: Sequence[CommitType]) -> str: ...

    def ask_scope(self, scopes: Sequence[str] | None) -> str | None: ...

    def confirm(self, message: str, default: bool = False) -> bool: ...

    def text(self, message: str, default: str | None = None, *, required: bool = False) -> str: ...

    def select(self, message: str, choices: Sequence[tuple[str, str]], default: str | None = None) -> str: ...


def _execute(prompt: Any) -> Any:
    try:
        return prompt.execute()
    except KeyboardInterrupt as exc:  # pragma: no cover - user cancel
        raise UserAbort("User cancelled the prompt.") from exc


def _valid_scope(value: str) -> bool:
    value = value.strip()
    return not value or is_valid_scope(value)


class InteractivePrompter:
    """Prompts on the attached terminal."""

    def ask_subject(self) -> str:
        answer = _execute(
            inquirer.text(
                message="Commit subject (without type prefix):",
                validate=lambda value: bool(value.strip()),
                invalid_message="Commit message cannot be empty",
            )
        )
        return str(answer).strip()

    def ask_type(self, types: Sequence[CommitType]) -> str:
        choices = [Choice(value=t.value, name=t.label) for t in types]
        return str(_execute(inquirer.select(message="Commit type (prefix):", choices=choices)))

    def ask_scope(self, scopes: Sequence[str] | None) -> str | None:
        if scopes:
            choices = [Choice(value=NO_SCOPE, name="(no scope)")]
            choices.extend(Choice(value=scope, name=scope) for scope in scopes)
            answer = _execute(inquirer.select(message="Commit scope:", choices=choices))
        else:
            answer = _execute(
                inquirer.text(
                    message="Commit scope (optional):",
                    validate=_valid_scope,
                    invalid_message="Scope cannot contain whitespace or parentheses",
                )
            )
        answer = str(answer or "").strip()
        return answer or None

    def confirm(self, message: str, default: bool = False) -> bool:
        return bool(_execute(inquirer.confirm(message=message, default=default)))

    def text(self, message: str, default: str | None = None, *, required: bool = False) -> str:
        kwargs: dict[str, Any] = {"message": message, "default": default or ""}
        if required:
            kwargs["validate"] = lambda value: bool(value.strip())
            kwargs["invalid_message"] = "A value is required"
        return str(_execute(inquirer.text(**kwargs))).strip()

    def select(self, message: str, choices: Sequence[tuple[str, str]], default: str | None = None) -> str:
        options = [Choice(value=value, name=name) for value, name in choices]
        return str(_execute(inquirer.select(message=message, choices=options, default=default)))


class ScriptedPrompter:
    """Answers prompts from pre-supplied values.

    Each question kind pops from its own queue. ``text`` and ``select`` fall
    back to the prompt's default once their queue is empty; every other kind
    raises :class:`UserAbort` when it runs out of answers.
    """

    def __init__(
        self,
        *,
        subjects: Iterable[str] = (),
        types: Iterable[str] = (),
        scopes: Iterable[str | None] = (),
        confirms: Iterable[bool] = (),
        texts: Iterable[str] = (),
        selections: Iterable[str] = (),
    ) -> None:
        self.subjects = deque(subjects)
        self.types = deque(types)
        self.scopes = deque(scopes)
        self.confirms = deque(confirms)
        self.texts = deque(texts)
        self.selections = deque(selections)
        self.asked: list[str] = []

    def _pop(self, queue: deque, kind: str) -> Any:
        self.asked.append(kind)
        if not queue:
            raise UserAbort(f"No scripted answer for {kind} prompt.")
        return queue.popleft()

    def ask_subject(self) -> str:
        return str(self._pop(self.subjects, "subject")).strip()

    def ask_type(self, types: Sequence[CommitType]) -> str:
        return str(self._pop(self.types, "type"))

    def ask_scope(self, scopes: Sequence[str] | None) -> str | None:
        if not self.scopes:
            self.asked.append("scope")
            return None
        answer = self._pop(self.scopes, "scope")
        return (answer or "").strip() or None

    def confirm(self, message: str, default: bool = False) -> bool:
        return bool(self._pop(self.confirms, "confirm"))

    def text(self, message: str, default: str | None = None, *, required: bool = False) -> str:
        self.asked.append("text")
        answer = self.texts.popleft() if self.texts else (default or "")
        answer = answer.strip() or (default or "")
        if required and not answer:
            raise UserAbort(f"No scripted answer for required prompt: {message}")
        return answer

    def select(self, message: str, choices: Sequence[tuple[str, str]], default: str | None = None) -> str:
        self.asked.append("select")
        if self.selections:
            return self.selections.popleft()
        if default is not None:
            return default
        raise UserAbort(f"No scripted answer for select prompt: {message}")
