"""Parsing of raw model output into titles and outline nodes."""

from __future__ import annotations

import json
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from blogweaver.models.outline import OutlineNode
from blogweaver.utils.ids import IdFactory, new_node_id

_BULLET_RE = re.compile(r"^[-*•\d.\s]+")
_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class OutlineParseError(ValueError):
    """Raised when a model response does not contain a usable outline."""


class _GeneratedHeading(BaseModel):
    """One outline entry as emitted by the model. Its ``id`` is ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    level: int = Field(ge=1)


def parse_titles(text: str) -> list[str]:
    """Extract one title per non-blank line, stripping bullet and numbering markers."""

    titles: list[str] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        title = _BULLET_RE.sub("", line).strip()
        if title:
            titles.append(title)
    return titles


def parse_outline(text: str, *, id_factory: IdFactory = new_node_id) -> list[OutlineNode]:
    """Extract the JSON outline array from a (possibly noisy) model response.

    Models tend to wrap the JSON in prose or code fences, so the widest ``[...]`` span is
    parsed. Model-supplied ids are replaced with fresh ones from ``id_factory``.

    Raises:
        OutlineParseError: If no non-empty, well-formed array is found.
    """

    match = _JSON_ARRAY_RE.search(text or "")
    if not match:
        raise OutlineParseError("no JSON array in outline response")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise OutlineParseError(f"outline response is not valid JSON: {e}") from e
    if not isinstance(data, list) or not data:
        raise OutlineParseError("outline response is empty")

    nodes: list[OutlineNode] = []
    for raw in data:
        try:
            heading = _GeneratedHeading.model_validate(raw)
        except ValidationError as e:
            raise OutlineParseError(f"invalid outline item {raw!r}") from e
        nodes.append(OutlineNode(id=id_factory(), title=heading.title.strip(), level=heading.level))
    return nodes
