"""Tests for the step wizard."""

from __future__ import annotations

import asyncio

import pytest

from blogweaver.config import Settings
from blogweaver.generation.service import GenerationService
from blogweaver.models.post import BlogPost, GenerationStep
from blogweaver.orchestrator.wizard import WizardSession, WizardStepError
from blogweaver.utils.ids import sequential_ids

from fakes import FakeLLM
from outline_helpers import ids


OUTLINE_JSON = (
    '[{"id": "1", "title": "Intro", "level": 1},'
    ' {"id": "2", "title": "Soil", "level": 2},'
    ' {"id": "3", "title": "Wrap-up", "level": 1}]'
)


def _wizard(llm: FakeLLM | None) -> WizardSession:
    settings = Settings(openai_api_key=None, _env_file=None)
    service = GenerationService(llm, settings, id_factory=sequential_ids("g"))
    return WizardSession(service, session_id="ses_test", id_factory=sequential_ids("u"))


def test_full_walkthrough_with_llm() -> None:
    """It should go theme -> titles -> outline -> content and save a post."""

    llm = FakeLLM("- Balcony gardens 101\n- Herbs on a sill", OUTLINE_JSON, "# Balcony gardens 101\n...")
    wizard = _wizard(llm)

    async def walk() -> None:
        titles = await wizard.submit_theme("  gardening ")
        assert titles == ["Balcony gardens 101", "Herbs on a sill"]
        assert wizard.step is GenerationStep.TITLES

        store = await wizard.select_title(titles[0])
        assert wizard.step is GenerationStep.OUTLINE
        assert ids(store.nodes) == ["g1", "g2", "g3"]

        store.add("g1")
        store.move("g3", "up")
        content = await wizard.approve_outline()
        assert content.startswith("# Balcony gardens 101")

    asyncio.run(walk())
    assert wizard.step is GenerationStep.CONTENT
    assert wizard.warning is None
    assert wizard.theme == "gardening"
    assert "## Wrap-up" in llm.calls[2][0][1].content

    saved: list[BlogPost] = []
    post = wizard.save(saved.append)
    assert saved == [post]
    assert post.id == "ses_test"
    assert post.selected_title == "Balcony gardens 101"
    assert ids(post.outline) == ["g3", "g1", "g2", "u1"]


def test_fallbacks_set_warning_and_keep_going() -> None:
    """Without an LLM every step still produces content, with a warning."""

    wizard = _wizard(None)

    async def walk() -> None:
        titles = await wizard.submit_theme("tea")
        await wizard.select_title(titles[3])
        await wizard.approve_outline()

    asyncio.run(walk())
    assert wizard.step is GenerationStep.CONTENT
    assert wizard.warning is not None
    assert len(wizard.outline) == 7
    assert wizard.content.startswith("# tea explained")


def test_regenerate_outline_replaces_wholesale() -> None:
    """Regeneration should discard edits and collapse state."""

    wizard = _wizard(FakeLLM("- T", OUTLINE_JSON, OUTLINE_JSON))

    async def walk() -> None:
        await wizard.submit_theme("x")
        await wizard.select_title("T")
        wizard.outline.collapse("g1")
        wizard.outline.remove("g3")
        await wizard.regenerate_outline()

    asyncio.run(walk())
    assert ids(wizard.outline.nodes) == ["g4", "g5", "g6"]
    assert wizard.outline.collapsed_ids == frozenset()


def test_step_guards() -> None:
    """Actions out of order and forward jumps should raise WizardStepError."""

    wizard = _wizard(None)
    with pytest.raises(WizardStepError):
        asyncio.run(wizard.approve_outline())
    with pytest.raises(WizardStepError):
        wizard.go_to(GenerationStep.OUTLINE)
    with pytest.raises(WizardStepError):
        wizard.to_post()
    with pytest.raises(ValueError):
        asyncio.run(wizard.submit_theme("   "))


def test_go_back_to_earlier_step() -> None:
    """The user may return to any step already passed and continue from there."""

    wizard = _wizard(None)

    async def walk() -> None:
        await wizard.submit_theme("tea")
        await wizard.select_title("Tea time")
        wizard.go_to("titles")
        assert wizard.step is GenerationStep.TITLES
        await wizard.select_title("Green tea")

    asyncio.run(walk())
    assert wizard.step is GenerationStep.OUTLINE
    assert wizard.selected_title == "Green tea"
    with pytest.raises(WizardStepError):
        wizard.go_to("outline")


def test_go_to_cancels_pending_drag() -> None:
    """Leaving the outline step must not leave a drag half-open."""

    wizard = _wizard(None)

    async def walk() -> None:
        await wizard.submit_theme("tea")
        await wizard.select_title("Tea time")

    asyncio.run(walk())
    first = wizard.outline.nodes[0].id
    wizard.drag.start(first)
    wizard.go_to(GenerationStep.THEME)
    assert not wizard.drag.active


def test_update_content_only_in_content_step() -> None:
    """Manual edits replace the generated article."""

    wizard = _wizard(None)

    async def walk() -> None:
        await wizard.submit_theme("tea")
        await wizard.select_title("Tea time")
        with pytest.raises(WizardStepError):
            wizard.update_content("too early")
        await wizard.approve_outline()

    asyncio.run(walk())
    wizard.update_content("my own words")
    assert wizard.to_post().content == "my own words"
