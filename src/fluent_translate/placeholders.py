from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from fluent.syntax import ast


log = logging.getLogger("fluent_translate.placeholders")

# Stands in for every placeable in the text sent to the translation service.
SENTINEL = "___"
# Rendering used for placeables that cannot be rebuilt from the stripped text.
OPAQUE = "___"

CONTINUATION_INDENT = "    "


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class PlaceholderRef:
    index: int


Segment = Union[TextSegment, PlaceholderRef]


@dataclass(frozen=True)
class TranslationUnit:
    id: str
    segments: tuple[Segment, ...]
    placeholders: tuple[str, ...]

    @property
    def text(self) -> str:
        return "".join(
            seg.text if isinstance(seg, TextSegment) else SENTINEL
            for seg in self.segments
        )

    def restore(self, translated: str) -> str:
        return reinsert_placeholders(translated, self.placeholders, self.id)

    def render_source(self) -> str:
        """The untranslated text with every placeholder in place."""
        return "".join(
            seg.text if isinstance(seg, TextSegment) else self.placeholders[seg.index]
            for seg in self.segments
        )


def _reference(name: str, attribute: ast.Identifier | None) -> str:
    if attribute is not None:
        return f"{name}.{attribute.name}"
    return name


def render_expression(expression: ast.SyntaxNode) -> str:
    if isinstance(expression, ast.StringLiteral):
        return f'{{ "{expression.value}" }}'
    if isinstance(expression, ast.NumberLiteral):
        return f"{{ {expression.value} }}"
    if isinstance(expression, ast.MessageReference):
        return f"{{ {_reference(expression.id.name, expression.attribute)} }}"
    if isinstance(expression, ast.TermReference):
        return f"{{ -{_reference(expression.id.name, expression.attribute)} }}"
    if isinstance(expression, ast.VariableReference):
        return f"{{ ${expression.id.name} }}"
    # Function calls, select expressions and nested placeables.
    return OPAQUE


def strip_pattern(pattern: ast.Pattern, message_id: str = "") -> TranslationUnit:
    segments: list[Segment] = []
    placeholders: list[str] = []
    for element in pattern.elements:
        if isinstance(element, ast.TextElement):
            segments.append(TextSegment(element.value))
            continue
        segments.append(PlaceholderRef(len(placeholders)))
        placeholders.append(render_expression(element.expression))
    return TranslationUnit(
        id=message_id, segments=tuple(segments), placeholders=tuple(placeholders)
    )


def reinsert_placeholders(
    translated: str, placeholders: tuple[str, ...] | list[str], message_id: str = ""
) -> str:
    if not placeholders:
        return translated
    parts = translated.split(SENTINEL)
    found = len(parts) - 1
    if found < len(placeholders):
        # TODO: decide where dropped placeholders belong once there is a product rule for it.
        log.warning(
            "translation of `%s` kept %s of %s placeholders; dropping %s",
            message_id or "?",
            found,
            len(placeholders),
            ", ".join(placeholders[found:]),
        )
    out = [parts[0]]
    for idx, part in enumerate(parts[1:]):
        out.append(placeholders[idx] if idx < len(placeholders) else SENTINEL)
        out.append(part)
    return "".join(out)


def indent_continuation_lines(text: str) -> str:
    return text.replace("\n", "\n" + CONTINUATION_INDENT)
