"""Pure message building for generated rules. No I/O."""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Union

from jqlint.domain.constants import (
    API_DOCS_URL,
    UNDOCUMENTED_UTILITIES,
    UNLINKED_COLLECTION_METHODS,
    ClassifierMode,
)
from jqlint.domain.nodes import Node

# A node when reporting, True when rendering context-free documentation
MessageSubject = Union[Node, bool]

_PREFER_CLAUSE = re.compile(r"(Prefer .*) to .*$")


@dataclass(frozen=True)
class StaticMessage:
    text: str

    def render(self, subject: MessageSubject) -> str:
        return self.text


@dataclass(frozen=True)
class TemplatedMessage:
    """Message computed from the reported node, or from ``True`` for docs."""

    template: Callable[[MessageSubject], str]

    def render(self, subject: MessageSubject) -> str:
        return self.template(subject) or ""


Message = Union[StaticMessage, TemplatedMessage]
MessageLike = Union[Message, str, Callable[[MessageSubject], str], None]


class MessageComposer:
    """Builds diagnostic text and documentation links. Stateless."""

    @staticmethod
    def as_message(message: MessageLike) -> Message | None:
        """Adapt a plain string or callable to the two message variants."""
        if message is None or isinstance(message, (StaticMessage, TemplatedMessage)):
            return message
        if isinstance(message, str):
            return StaticMessage(message)
        if callable(message):
            return TemplatedMessage(message)
        raise TypeError(f"Unsupported message type: {type(message).__name__}")

    @staticmethod
    def message_suffix(message: Message | None) -> str:
        """
        Sentence appended to a rule description.

        The rule name is already in the first half of the description, so
        ``Prefer X to .name`` is shortened to ``Prefer X``.
        """
        text = message.render(True) if message is not None else ""
        if not text:
            return ""
        return " " + _PREFER_CLAUSE.sub(r"\1", text) + "."

    @staticmethod
    def to_plain_string(
        message: Message | None,
        node: Node,
        name: str,
        mode: ClassifierMode,
        deprecated: bool | Sequence[str] = False,
    ) -> str:
        """Render the report text: no inline-code markup, fallback and deprecation clause."""
        text = (message.render(node) if message is not None else "").replace("`", "")
        if not text:
            text = MessageComposer.fallback_message(name, mode)
        if deprecated:
            text += ". This rule is deprecated"
            if not isinstance(deprecated, bool):
                text += ", use " + ", ".join(deprecated)
            text += "."
        return text

    @staticmethod
    def fallback_message(name: str, mode: ClassifierMode) -> str:
        if mode is ClassifierMode.UTIL:
            return f"$.{name} is not allowed"
        if mode is ClassifierMode.COLLECTION_UTIL:
            return f".{name}/$.{name} is not allowed"
        return f".{name} is not allowed"

    @staticmethod
    def collection_link(name: str) -> str:
        if name in UNLINKED_COLLECTION_METHODS:
            return f"`.{name}`"
        return f"[`.{name}`]({API_DOCS_URL}{name}/)"

    @staticmethod
    def global_link(name: str) -> str:
        if name in UNDOCUMENTED_UTILITIES:
            return f"`$.{name}`"
        return f"[`$.{name}`]({API_DOCS_URL}jQuery.{name}/)"
