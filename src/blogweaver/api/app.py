"""FastAPI app exposing the wizard and the outline editor to a browser front-end.

Sessions live in process memory only; restarting the server discards them.
"""

from __future__ import annotations

from typing import Literal

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from blogweaver.config import Settings, load_settings
from blogweaver.generation.service import GenerationService
from blogweaver.logging import configure_logging, get_logger
from blogweaver.models.outline import OutlineNode
from blogweaver.models.post import GenerationStep
from blogweaver.orchestrator.wizard import WizardSession, WizardStepError
from blogweaver.outline.drop import DropIntent, RowBounds
from blogweaver.outline.errors import OutlineError, UnknownNodeError


class ThemeRequest(BaseModel):
    theme: str


class TitleRequest(BaseModel):
    title: str


class ContentRequest(BaseModel):
    content: str


class StepRequest(BaseModel):
    step: GenerationStep


class AddNodeRequest(BaseModel):
    parent_id: str | None = None
    title: str | None = None


class RenameRequest(BaseModel):
    title: str


class MoveRequest(BaseModel):
    direction: Literal["up", "down"]


class DragStartRequest(BaseModel):
    source_id: str


class DragOverRequest(BaseModel):
    """Pointer over a row. Either ``intent`` or the row geometry must be sent."""

    target_id: str | None = None
    intent: DropIntent | None = None
    row_top: float | None = None
    row_height: float | None = Field(default=None, ge=0)
    pointer_y: float | None = None


class OutlineRow(BaseModel):
    """A visible outline row with the flags the editor needs to render it."""

    id: str
    title: str
    level: int
    has_children: bool
    collapsed: bool
    can_move_up: bool
    can_move_down: bool


class OutlineView(BaseModel):
    nodes: list[OutlineNode]
    visible: list[OutlineRow]


class DragState(BaseModel):
    active: bool
    source_id: str | None = None
    target_id: str | None = None
    intent: DropIntent | None = None


class SessionView(BaseModel):
    session_id: str
    step: GenerationStep
    theme: str
    title_options: list[str]
    selected_title: str | None
    outline: OutlineView
    content: str
    warning: str | None


def _outline_view(session: WizardSession) -> OutlineView:
    store = session.outline
    rows = [
        OutlineRow(
            id=n.id,
            title=n.title,
            level=n.level,
            has_children=store.has_children(n.id),
            collapsed=store.is_collapsed(n.id),
            can_move_up=store.can_move(n.id, "up"),
            can_move_down=store.can_move(n.id, "down"),
        )
        for n in store.visible_nodes()
    ]
    return OutlineView(nodes=list(store.nodes), visible=rows)


def _session_view(session: WizardSession) -> SessionView:
    return SessionView(
        session_id=session.session_id,
        step=session.step,
        theme=session.theme,
        title_options=session.title_options,
        selected_title=session.selected_title,
        outline=_outline_view(session),
        content=session.content,
        warning=session.warning,
    )


def _drag_state(session: WizardSession) -> DragState:
    proposal = session.drag.proposal
    return DragState(
        active=session.drag.active,
        source_id=session.drag.source_id,
        target_id=proposal.target_id if proposal else None,
        intent=proposal.intent if proposal else None,
    )


def create_app(settings: Settings | None = None, service: GenerationService | None = None) -> FastAPI:
    """Create FastAPI app."""

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)
    service = service or GenerationService.from_settings(settings)

    app = FastAPI(title="BlogWeaver", version="0.1.0")
    sessions: dict[str, WizardSession] = {}

    @app.exception_handler(UnknownNodeError)
    async def _unknown_node(request: Request, exc: UnknownNodeError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(WizardStepError)
    async def _wrong_step(request: Request, exc: WizardStepError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(OutlineError)
    async def _bad_outline_request(request: Request, exc: OutlineError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    def get_session(session_id: str) -> WizardSession:
        session = sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail="session not found")
        return session

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    # ------------------------------------------------------------------
    # Wizard

    @app.post("/sessions", status_code=201)
    def create_session() -> SessionView:
        session = WizardSession(service, default_node_title=settings.default_node_title)
        sessions[session.session_id] = session
        logger.info("Session created", extra={"session_id": session.session_id})
        return _session_view(session)

    @app.get("/sessions/{session_id}")
    def read_session(session_id: str) -> SessionView:
        return _session_view(get_session(session_id))

    @app.delete("/sessions/{session_id}", status_code=204)
    def delete_session(session_id: str) -> None:
        get_session(session_id)
        del sessions[session_id]

    @app.post("/sessions/{session_id}/step")
    def go_to_step(session_id: str, req: StepRequest) -> SessionView:
        session = get_session(session_id)
        session.go_to(req.step)
        return _session_view(session)

    @app.post("/sessions/{session_id}/theme")
    async def submit_theme(session_id: str, req: ThemeRequest) -> SessionView:
        session = get_session(session_id)
        if not req.theme.strip():
            raise HTTPException(status_code=422, detail="theme must not be empty")
        await session.submit_theme(req.theme)
        return _session_view(session)

    @app.post("/sessions/{session_id}/titles/regenerate")
    async def regenerate_titles(session_id: str) -> SessionView:
        session = get_session(session_id)
        await session.regenerate_titles()
        return _session_view(session)

    @app.post("/sessions/{session_id}/title")
    async def select_title(session_id: str, req: TitleRequest) -> SessionView:
        session = get_session(session_id)
        if not req.title.strip():
            raise HTTPException(status_code=422, detail="title must not be empty")
        await session.select_title(req.title)
        return _session_view(session)

    @app.post("/sessions/{session_id}/outline/regenerate")
    async def regenerate_outline(session_id: str) -> SessionView:
        session = get_session(session_id)
        await session.regenerate_outline()
        return _session_view(session)

    @app.post("/sessions/{session_id}/outline/approve")
    async def approve_outline(session_id: str) -> SessionView:
        session = get_session(session_id)
        await session.approve_outline()
        return _session_view(session)

    @app.post("/sessions/{session_id}/content/regenerate")
    async def regenerate_content(session_id: str) -> SessionView:
        session = get_session(session_id)
        await session.regenerate_content()
        return _session_view(session)

    @app.put("/sessions/{session_id}/content")
    def update_content(session_id: str, req: ContentRequest) -> SessionView:
        session = get_session(session_id)
        session.update_content(req.content)
        return _session_view(session)

    # ------------------------------------------------------------------
    # Outline editing

    @app.get("/sessions/{session_id}/outline")
    def read_outline(session_id: str) -> OutlineView:
        return _outline_view(get_session(session_id))

    @app.post("/sessions/{session_id}/outline/nodes", status_code=201)
    def add_node(session_id: str, req: AddNodeRequest) -> OutlineNode:
        session = get_session(session_id)
        return session.outline.add(req.parent_id, title=req.title)

    @app.delete("/sessions/{session_id}/outline/nodes/{node_id}")
    def remove_node(session_id: str, node_id: str) -> list[OutlineNode]:
        session = get_session(session_id)
        return session.outline.remove(node_id)

    @app.patch("/sessions/{session_id}/outline/nodes/{node_id}")
    def rename_node(session_id: str, node_id: str, req: RenameRequest) -> OutlineNode:
        session = get_session(session_id)
        return session.outline.rename(node_id, req.title)

    @app.post("/sessions/{session_id}/outline/nodes/{node_id}/move")
    def move_node(session_id: str, node_id: str, req: MoveRequest) -> OutlineView:
        session = get_session(session_id)
        session.outline.move(node_id, req.direction)
        return _outline_view(session)

    @app.post("/sessions/{session_id}/outline/nodes/{node_id}/collapse")
    def toggle_collapse(session_id: str, node_id: str) -> OutlineView:
        session = get_session(session_id)
        session.outline.toggle_collapse(node_id)
        return _outline_view(session)

    # ------------------------------------------------------------------
    # Drag and drop

    @app.post("/sessions/{session_id}/outline/drag/start")
    def drag_start(session_id: str, req: DragStartRequest) -> DragState:
        session = get_session(session_id)
        session.drag.start(req.source_id)
        return _drag_state(session)

    @app.post("/sessions/{session_id}/outline/drag/over")
    def drag_over(session_id: str, req: DragOverRequest) -> DragState:
        session = get_session(session_id)
        bounds = None
        if req.row_top is not None and req.row_height is not None:
            bounds = RowBounds(top=req.row_top, height=req.row_height)
        session.drag.over(req.target_id, bounds, req.pointer_y, intent=req.intent)
        return _drag_state(session)

    @app.post("/sessions/{session_id}/outline/drag/end")
    def drag_end(session_id: str) -> OutlineView:
        session = get_session(session_id)
        session.drag.end()
        return _outline_view(session)

    @app.post("/sessions/{session_id}/outline/drag/cancel")
    def drag_cancel(session_id: str) -> DragState:
        session = get_session(session_id)
        session.drag.cancel()
        return _drag_state(session)

    return app
