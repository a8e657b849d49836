"""Tests for response parsing and the generation service fallbacks."""

from __future__ import annotations

import asyncio

import pytest

from blogweaver.config import Settings
from blogweaver.generation.parsing import OutlineParseError, parse_outline, parse_titles
from blogweaver.generation.service import GenerationService
from blogweaver.llm.client import LLMRequestError
from blogweaver.models.outline import OutlineNode
from blogweaver.utils.ids import sequential_ids

from fakes import FakeLLM
from outline_helpers import ids, levels


def _settings() -> Settings:
    return Settings(openai_api_key=None, _env_file=None)


def _service(llm: FakeLLM | None) -> GenerationService:
    return GenerationService(llm, _settings(), id_factory=sequential_ids("g"))


def test_parse_titles_strips_markers() -> None:
    """It should drop blank lines and leading bullets or numbering."""

    text = "1. First title\n\n- Second title\n* Third\n• Fourth\n   \n10. Fifth"
    assert parse_titles(text) == ["First title", "Second title", "Third", "Fourth", "Fifth"]


def test_parse_outline_from_noisy_response() -> None:
    """It should find the JSON array inside prose and assign fresh ids."""

    raw = (
        "Sure! Here is the outline:\n```json\n"
        '[{"id": "1", "title": "Intro", "level": 1},'
        ' {"id": 2, "title": "Why it matters", "level": 2},'
        ' {"title": "Wrap-up", "level": 1}]\n```'
    )
    nodes = parse_outline(raw, id_factory=sequential_ids("g"))
    assert ids(nodes) == ["g1", "g2", "g3"]
    assert [n.title for n in nodes] == ["Intro", "Why it matters", "Wrap-up"]
    assert levels(nodes) == [1, 2, 1]


@pytest.mark.parametrize(
    "raw",
    [
        "no json here",
        "[not json]",
        "[]",
        '[{"title": "Bad", "level": 0}]',
        '[{"level": 1}]',
    ],
)
def test_parse_outline_rejects_unusable_output(raw: str) -> None:
    """It should raise OutlineParseError for anything it cannot trust."""

    with pytest.raises(OutlineParseError):
        parse_outline(raw)


def test_generate_titles_uses_llm() -> None:
    """It should return parsed titles and pass the configured sampling options."""

    llm = FakeLLM("- Alpha\n- Beta")
    result = asyncio.run(_service(llm).generate_titles("gardening"))

    assert result.value == ["Alpha", "Beta"]
    assert not result.fallback
    messages, temperature, max_tokens = llm.calls[0]
    assert messages[0].role == "system"
    assert "gardening" in messages[1].content
    assert temperature == 0.7
    assert max_tokens == 1000


def test_generate_titles_falls_back_on_error() -> None:
    """A failed request should yield placeholder titles derived from the theme."""

    result = asyncio.run(_service(FakeLLM(LLMRequestError("boom"))).generate_titles("cooking"))
    assert result.fallback
    assert result.warning and "boom" in result.warning
    assert len(result.value) == 5
    assert all("cooking" in t for t in result.value)


def test_generate_titles_falls_back_on_empty_response() -> None:
    """An empty list of titles is not a usable result."""

    result = asyncio.run(_service(FakeLLM("\n\n")).generate_titles("cooking"))
    assert result.fallback
    assert len(result.value) == 5


def test_generate_outline_fallback_without_client() -> None:
    """Without a configured client the placeholder outline embeds the title."""

    service = _service(None)
    assert not service.configured
    result = asyncio.run(service.generate_outline("cooking", "Weeknight dinners"))
    assert result.fallback
    assert [n.title for n in result.value][1] == "Overview of Weeknight dinners"
    assert levels(result.value) == [1, 1, 2, 1, 1, 2, 1]
    assert ids(result.value) == [f"g{i}" for i in range(1, 8)]


def test_generate_outline_fallback_on_parse_error() -> None:
    """Unparseable outline output should be replaced with the placeholder."""

    result = asyncio.run(_service(FakeLLM("I cannot do that")).generate_outline("t", "T"))
    assert result.fallback
    assert len(result.value) == 7


def test_generate_content_includes_outline_in_prompt() -> None:
    """The content prompt should carry the rendered outline."""

    outline = [
        OutlineNode(id="1", title="Intro", level=1),
        OutlineNode(id="2", title="Details", level=2),
    ]
    llm = FakeLLM("# Article\nbody")
    result = asyncio.run(_service(llm).generate_content("theme", "Title", outline))

    assert result.value == "# Article\nbody"
    prompt = llm.calls[0][0][1].content
    assert "## Intro" in prompt
    assert "  ### Details" in prompt
    assert llm.calls[0][2] == 4000


def test_generate_content_fallback_is_deterministic() -> None:
    """The placeholder article should follow the outline and be stable."""

    outline = [
        OutlineNode(id="1", title="Intro", level=1),
        OutlineNode(id="2", title="Details", level=2),
    ]
    service = _service(FakeLLM(LLMRequestError("down"), LLMRequestError("down")))
    first = asyncio.run(service.generate_content("tea", "All about tea", outline))
    second = asyncio.run(service.generate_content("tea", "All about tea", outline))

    assert first.fallback
    assert first.value == second.value
    assert first.value.startswith("# All about tea")
    assert "\n## Intro\n" in first.value
    assert "\n### Details\n" in first.value


def test_from_settings_without_key_serves_placeholders() -> None:
    """A missing API key should not prevent the service from being built."""

    service = GenerationService.from_settings(_settings())
    assert not service.configured
