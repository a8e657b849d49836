"""Step wizard: theme -> titles -> outline -> content.

The wizard owns everything one user produces in a single editing session. Each forward step
calls the generation service; the outline step hands its result to an :class:`OutlineStore`,
which the user then edits in place. Saving passes a :class:`BlogPost` to an opaque sink.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from blogweaver.generation.service import GenerationResult, GenerationService
from blogweaver.logging import get_logger, session_context
from blogweaver.models.post import BlogPost, GenerationStep
from blogweaver.outline.drag import DragSession
from blogweaver.outline.store import OutlineStore
from blogweaver.utils.ids import IdFactory, new_node_id, new_session_id

logger = get_logger(__name__)

PostSink = Callable[[BlogPost], None]


class WizardStepError(RuntimeError):
    """Raised when an action is not allowed in the current wizard step."""


def _require_text(value: str, name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{name} must not be empty")
    return value


class WizardSession:
    """State of one article being written."""

    def __init__(
        self,
        service: GenerationService,
        *,
        session_id: str | None = None,
        id_factory: IdFactory = new_node_id,
        default_node_title: str = "New item",
    ) -> None:
        self.session_id = session_id or new_session_id()
        self._service = service
        self.step = GenerationStep.THEME
        self.theme = ""
        self.title_options: list[str] = []
        self.selected_title: str | None = None
        self.outline = OutlineStore(id_factory=id_factory, default_title=default_node_title)
        self.drag = DragSession(self.outline)
        self.content = ""
        self.warning: str | None = None
        self.created_at = datetime.utcnow()

    def _require_step(self, *allowed: GenerationStep) -> None:
        if self.step not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise WizardStepError(f"action requires step {names}; current step is {self.step.value}")

    def _record(self, result: GenerationResult) -> None:
        self.warning = result.warning if result.fallback else None

    def go_to(self, step: GenerationStep | str) -> None:
        """Navigate back to an earlier step. Moving forward requires the step actions."""

        target = GenerationStep(step)
        if target.position >= self.step.position:
            raise WizardStepError(f"cannot jump forward from {self.step.value} to {target.value}")
        self.drag.cancel()
        self.step = target

    # ------------------------------------------------------------------
    # Theme / titles

    async def submit_theme(self, theme: str) -> list[str]:
        self._require_step(GenerationStep.THEME, GenerationStep.TITLES)
        self.theme = _require_text(theme, "theme")
        with session_context(session_id=self.session_id, step=GenerationStep.TITLES):
            result = await self._service.generate_titles(self.theme)
        self._record(result)
        self.title_options = list(result.value)
        self.step = GenerationStep.TITLES
        return self.title_options

    async def regenerate_titles(self) -> list[str]:
        self._require_step(GenerationStep.TITLES)
        return await self.submit_theme(self.theme)

    # ------------------------------------------------------------------
    # Outline

    async def select_title(self, title: str) -> OutlineStore:
        self._require_step(GenerationStep.TITLES)
        self.selected_title = _require_text(title, "title")
        await self._generate_outline()
        self.step = GenerationStep.OUTLINE
        return self.outline

    async def regenerate_outline(self) -> OutlineStore:
        """Replace the current outline wholesale with a fresh one."""

        self._require_step(GenerationStep.OUTLINE)
        await self._generate_outline()
        return self.outline

    async def _generate_outline(self) -> None:
        assert self.selected_title is not None
        with session_context(session_id=self.session_id, step=GenerationStep.OUTLINE):
            result = await self._service.generate_outline(self.theme, self.selected_title)
        self._record(result)
        self.drag.cancel()
        self.outline.replace(result.value)

    # ------------------------------------------------------------------
    # Content

    async def approve_outline(self) -> str:
        self._require_step(GenerationStep.OUTLINE)
        self.drag.cancel()
        await self._generate_content()
        self.step = GenerationStep.CONTENT
        return self.content

    async def regenerate_content(self) -> str:
        self._require_step(GenerationStep.CONTENT)
        await self._generate_content()
        return self.content

    async def _generate_content(self) -> None:
        assert self.selected_title is not None
        with session_context(session_id=self.session_id, step=GenerationStep.CONTENT):
            result = await self._service.generate_content(self.theme, self.selected_title, self.outline.nodes)
        self._record(result)
        self.content = result.value

    def update_content(self, content: str) -> None:
        self._require_step(GenerationStep.CONTENT)
        self.content = content

    # ------------------------------------------------------------------
    # Save

    def to_post(self) -> BlogPost:
        self._require_step(GenerationStep.CONTENT)
        assert self.selected_title is not None
        return BlogPost(
            id=self.session_id,
            theme=self.theme,
            selected_title=self.selected_title,
            title_options=list(self.title_options),
            outline=list(self.outline.nodes),
            content=self.content,
            created_at=self.created_at,
            updated_at=datetime.utcnow(),
        )

    def save(self, sink: PostSink) -> BlogPost:
        """Hand the finished article to ``sink``."""

        post = self.to_post()
        sink(post)
        logger.info("Post saved", extra={"session_id": self.session_id, "chars": len(post.content)})
        return post
