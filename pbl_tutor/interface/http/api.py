"""HTTP API for the case simulation frontend.

Why: Consumable API without business logic; pure delegation to the use cases.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

try:
    from fastapi import FastAPI, Request
    from fastapi.concurrency import run_in_threadpool
    from fastapi.exceptions import RequestValidationError
    from fastapi.responses import FileResponse, JSONResponse
    from pydantic import BaseModel
except ImportError as err:
    raise ImportError("FastAPI not installed. Install with: pip install 'pbl-tutor'") from err

from pbl_tutor.application.dto.ask_dto import AskRequest
from pbl_tutor.config.compose import Container, build_container
from pbl_tutor.domain.errors import (
    CardNotFoundError,
    DomainError,
    EmbeddingError,
    NotReadyError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# Pydantic models for request/response validation
class AskRequestModel(BaseModel):
    """Request model for /ask."""

    case_id: str | int | None = None
    question: str | None = None
    revealed_ids: list[str] = []


class ReplyBlockModel(BaseModel):
    id: str
    title: str
    content: str


class AskResponseModel(BaseModel):
    """Response model for /ask."""

    reply_blocks: list[ReplyBlockModel]
    newly_revealed_ids: list[str]
    nohit: bool


class BootstrapResponseModel(BaseModel):
    initial: ReplyBlockModel


def status_for(error: BaseException) -> int:
    """HTTP status for a domain error: caller faults 4xx, service faults 5xx."""
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, CardNotFoundError):
        return 404
    if isinstance(error, EmbeddingError):
        return 502
    if isinstance(error, NotReadyError):
        return 503
    return 500


def error_response(error: BaseException) -> JSONResponse:
    return JSONResponse(status_code=status_for(error), content={"error": str(error)})


def create_app(container: Container | None = None, build_index_on_startup: bool = True) -> FastAPI:
    """Build the FastAPI app around a container.

    Args:
        container: Wired dependencies (default: from environment)
        build_index_on_startup: Embed all cards before serving; a failed build
            is logged and /ask answers 503 until a build succeeds
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if build_index_on_startup:
            try:
                await run_in_threadpool(app.state.container.build_index)
            except DomainError as ex:
                logger.error("Index build failed, service not ready: %s", ex)
        yield

    app = FastAPI(title="PBL Case Tutor API", version="0.1.0", lifespan=lifespan)
    app.state.container = container or build_container()

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "case_id & question required"})

    @app.get("/health")
    def health(request: Request) -> dict[str, Any]:
        index = request.app.state.container.index_store.snapshot()
        return {"ok": True, "ready": index is not None, "cards": len(index) if index else 0}

    @app.get("/bootstrap", response_model=BootstrapResponseModel)
    def bootstrap(request: Request, case_id: str = "1"):
        """Initial chief-complaint card of a case.

        Example:
            GET /bootstrap?case_id=1
            → {"initial": {"id": "c1", "title": "Fever", "content": "..."}}
        """
        try:
            uc = request.app.state.container.get_initial_card_use_case()
        except DomainError as ex:
            return error_response(ex)
        result = uc.execute(case_id)
        if not result.ok:
            if isinstance(result.error, CardNotFoundError):
                return JSONResponse(status_code=404, content={"error": "No initial card"})
            return error_response(result.error)
        card = result.value
        return BootstrapResponseModel(
            initial=ReplyBlockModel(id=card.id, title=card.title, content=card.content)
        )

    @app.post("/ask", response_model=AskResponseModel)
    def ask(req: AskRequestModel, request: Request):
        """Reveal the card(s) best matching a learner question.

        Example:
            POST /ask
            {"case_id": "1", "question": "Does the patient have fever?", "revealed_ids": []}
            → {"reply_blocks": [...], "newly_revealed_ids": ["c1"], "nohit": false}
        """
        dto = AskRequest(
            case_id="" if req.case_id is None else str(req.case_id),
            question=req.question or "",
            revealed_ids=tuple(req.revealed_ids),
        )
        result = request.app.state.container.get_ask_use_case().execute(dto)
        if not result.ok:
            if not isinstance(result.error, ValidationError):
                logger.error("ask failed: %s: %s", type(result.error).__name__, result.error)
            return error_response(result.error)

        answer = result.value
        return AskResponseModel(
            reply_blocks=[
                ReplyBlockModel(id=h.id, title=h.title, content=h.content) for h in answer.hits
            ],
            newly_revealed_ids=answer.newly_revealed_ids,
            nohit=answer.no_hit,
        )

    # Serve SPA (registered last so it never shadows the API routes)
    @app.get("/{full_path:path}", include_in_schema=False)
    def spa(full_path: str, request: Request):
        public_dir = os.path.abspath(request.app.state.container.settings.public_dir)
        index_html = os.path.join(public_dir, "index.html")
        candidate = os.path.abspath(os.path.join(public_dir, full_path))
        if (
            full_path
            and candidate.startswith(public_dir + os.sep)
            and os.path.isfile(candidate)
        ):
            return FileResponse(candidate)
        if os.path.isfile(index_html):
            return FileResponse(index_html)
        return JSONResponse(status_code=404, content={"error": "Not found"})

    return app


app = create_app()
