"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from learnify.adapters.local_upload_store import LocalUploadStore
from learnify.adapters.simulated_converters import (
    SimulatedImageToText,
    SimulatedSpeechToText,
)
from learnify.config import Settings
from learnify.containers import AppContainer
from learnify.domain.sessions import SessionRecord
from learnify.domain.solutions import SolutionPayload, SolutionRecord
from learnify.domain.wizard import PendingFile
from learnify.errors import NetworkError, PersistenceError
from learnify.services.chat import ChatClient, ChatService
from learnify.services.sessions import SessionRepository, SessionService
from learnify.services.solutions import TemplateSolutionStrategy
from learnify.services.solve import SolutionRepository, SolveService
from learnify.services.uploads import UploadStore
from learnify.services.wizard import AudioRecorder

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"pixels"
WAV_BYTES = b"RIFF" + b"\x00" * 4 + b"WAVEfmt "


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[str, SessionRecord] = field(default_factory=dict)

    def create_session(self, record: SessionRecord) -> None:
        self.sessions[record.session_id] = record


@dataclass
class InMemorySolutionRepository(SolutionRepository):
    """In-memory solution repository for tests."""

    records: list[SolutionRecord] = field(default_factory=list)
    fail: bool = False

    def create_solution(self, record: SolutionRecord) -> None:
        if self.fail:
            raise PersistenceError("Failed to save solution")
        self.records.append(record)


@dataclass
class InMemoryUploadStore(UploadStore):
    """Upload store that keeps files in a dict."""

    files: dict[str, bytes] = field(default_factory=dict)

    def save(self, filename: str, data: bytes) -> str:
        path = f"uploads/{len(self.files)}-{filename}"
        self.files[path] = data
        return path


@dataclass
class FakeChatClient(ChatClient):
    """Chat client returning a canned reply or failing."""

    reply: str | None = "Paris is the capital of France."
    fail: bool = False
    prompts: list[tuple[str, bool]] = field(default_factory=list)

    async def complete(
        self, prompt: str, *, model: str, json_output: bool = False
    ) -> str | None:
        self.prompts.append((prompt, json_output))
        if self.fail:
            raise NetworkError("Chat completion request failed")
        return self.reply


@dataclass
class FakeSolveApi:
    """Solve API fake that records calls and can simulate outages."""

    fail: bool = False
    session_id: str = "session-from-api"
    calls: list[tuple[str, object]] = field(default_factory=list)
    payload: SolutionPayload = field(
        default_factory=lambda: SolutionPayload(
            solution="<p>server solution</p>",
            explanation="server explanation",
            resources=["a", "b", "c"],
        )
    )

    async def create_session(self) -> str:
        self.calls.append(("session", None))
        if self.fail:
            raise NetworkError("API request failed")
        return self.session_id

    async def solve_text(
        self, question: str, subject: str, class_level: int, session_id: str | None
    ) -> SolutionPayload:
        return self._answer("text", question)

    async def solve_image(
        self, image: PendingFile, subject: str, class_level: int, session_id: str | None
    ) -> SolutionPayload:
        return self._answer("image", image)

    async def solve_voice(
        self, audio: PendingFile, subject: str, class_level: int, session_id: str | None
    ) -> SolutionPayload:
        return self._answer("voice", audio)

    def _answer(self, method: str, body: object) -> SolutionPayload:
        self.calls.append((method, body))
        if self.fail:
            raise NetworkError("API request failed")
        return self.payload


@dataclass
class FakeRecorder(AudioRecorder):
    """Recorder that hands back a fixed clip."""

    clip: PendingFile | None = field(
        default_factory=lambda: PendingFile(
            filename="recording.wav", content_type="audio/wav", data=WAV_BYTES
        )
    )
    started: int = 0
    stopped: int = 0

    def start(self) -> None:
        self.started += 1

    def stop(self) -> PendingFile | None:
        self.stopped += 1
        return self.clip


@dataclass
class FakeClock:
    """Manually advanced monotonic clock."""

    now: float = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        mongodb_uri="mongodb://localhost:27017/learnify-test",
        upload_dir=str(tmp_path / "uploads"),
        openai_api_key="openai-key",
    )


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def solution_repository() -> InMemorySolutionRepository:
    return InMemorySolutionRepository()


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def solve_service(solution_repository: InMemorySolutionRepository) -> SolveService:
    return SolveService(
        strategy=TemplateSolutionStrategy(),
        repository=solution_repository,
        upload_store=InMemoryUploadStore(),
        image_converter=SimulatedImageToText(),
        speech_converter=SimulatedSpeechToText(),
        max_upload_bytes=5 * 1024 * 1024,
    )


@pytest.fixture
def container(
    settings: Settings,
    session_repository: InMemorySessionRepository,
    solution_repository: InMemorySolutionRepository,
    chat_client: FakeChatClient,
) -> AppContainer:
    upload_store = LocalUploadStore.create(settings.upload_dir)
    solve_service = SolveService(
        strategy=TemplateSolutionStrategy(),
        repository=solution_repository,
        upload_store=upload_store,
        image_converter=SimulatedImageToText(),
        speech_converter=SimulatedSpeechToText(),
        max_upload_bytes=settings.max_upload_bytes,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_service=SessionService(session_repository),
        solve_service=solve_service,
        chat_service=ChatService(client=chat_client, model=settings.openai_model),
        upload_store=upload_store,
        close_resources=close_resources,
    )
