"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from learnify.api.error_handlers import register_error_handlers
from learnify.api.models import HelperRequest, SolveTextRequest
from learnify.api.pages import render_ask_page, render_wizard_page
from learnify.app_logging import configure_logging
from learnify.containers import AppContainer
from learnify.domain.assistant import helper_reply
from learnify.domain.solutions import SolutionPayload
from learnify.services.uploads import UploadedFile


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    max_upload_bytes = container.settings.max_upload_bytes

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Learnify started", extra={"env": container.settings.environment})
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    register_error_handlers(app)
    app.mount(
        "/uploads",
        StaticFiles(directory=container.upload_store.directory),
        name="uploads",
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def wizard_ui() -> HTMLResponse:
        """Serve the question wizard."""
        return HTMLResponse(render_wizard_page())

    @app.post("/api/sessions")
    async def create_session(request: Request) -> dict[str, str]:
        """Issue a new visitor session."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.create_session()
        return {"sessionId": session.session_id}

    @app.post("/api/solve/text")
    async def solve_text(body: SolveTextRequest, request: Request) -> SolutionPayload:
        """Solve a typed question."""
        state_container: AppContainer = request.app.state.container
        return await state_container.solve_service.solve_text(
            question=body.question,
            subject=body.subject,
            class_level=body.class_level,
            session_id=body.session_id,
        )

    @app.post("/api/solve/image")
    async def solve_image(
        request: Request,
        image: UploadFile | None = File(default=None),
        subject: str | None = Form(default=None),
        class_level: str | None = Form(default=None, alias="classLevel"),
        session_id: str | None = Form(default=None, alias="sessionId"),
    ) -> SolutionPayload:
        """Solve a photographed question."""
        state_container: AppContainer = request.app.state.container
        return await state_container.solve_service.solve_image(
            image=await _read_upload(image, max_upload_bytes),
            subject=subject,
            class_level=class_level,
            session_id=session_id,
        )

    @app.post("/api/solve/voice")
    async def solve_voice(
        request: Request,
        audio: UploadFile | None = File(default=None),
        subject: str | None = Form(default=None),
        class_level: str | None = Form(default=None, alias="classLevel"),
        session_id: str | None = Form(default=None, alias="sessionId"),
    ) -> SolutionPayload:
        """Solve a spoken question."""
        state_container: AppContainer = request.app.state.container
        return await state_container.solve_service.solve_voice(
            audio=await _read_upload(audio, max_upload_bytes),
            subject=subject,
            class_level=class_level,
            session_id=session_id,
        )

    @app.post("/api/helper")
    async def helper(body: HelperRequest) -> dict[str, str]:
        """Answer the floating study helper."""
        return {"reply": helper_reply(body.query)}

    @app.get("/ask", response_class=HTMLResponse)
    async def ask_form() -> HTMLResponse:
        """Serve the single-question chat page."""
        return HTMLResponse(render_ask_page(None))

    @app.post("/ask", response_class=HTMLResponse)
    async def ask(request: Request, question: str = Form(default="")) -> HTMLResponse:
        """Forward one question to the chat model and show the reply."""
        if not question.strip():
            return HTMLResponse(render_ask_page(None))
        state_container: AppContainer = request.app.state.container
        answer = await state_container.chat_service.ask(question)
        return HTMLResponse(render_ask_page(answer))

    return app


async def _read_upload(
    upload: UploadFile | None, max_upload_bytes: int
) -> UploadedFile | None:
    """Read at most one byte past the ceiling so oversize files are detectable."""
    if upload is None:
        return None
    data = await upload.read(max_upload_bytes + 1)
    return UploadedFile(
        filename=upload.filename or "upload",
        content_type=upload.content_type or "",
        data=data,
    )
