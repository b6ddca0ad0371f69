"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pymongo import MongoClient

from learnify.adapters.local_upload_store import LocalUploadStore
from learnify.adapters.mongo_session_repository import MongoSessionRepository
from learnify.adapters.mongo_solution_repository import MongoSolutionRepository
from learnify.adapters.openai_chat_client import OpenAIChatClient
from learnify.adapters.simulated_converters import (
    SimulatedImageToText,
    SimulatedSpeechToText,
)
from learnify.config import DEFAULT_DATABASE, Settings
from learnify.services.chat import ChatService
from learnify.services.sessions import SessionService
from learnify.services.solutions import (
    LlmSolutionStrategy,
    SolutionStrategy,
    TemplateSolutionStrategy,
)
from learnify.services.solve import SolveService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionService
    solve_service: SolveService
    chat_service: ChatService
    upload_store: LocalUploadStore
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    mongo_client: MongoClient = MongoClient(resolved_settings.mongodb_uri)
    database = (
        mongo_client[resolved_settings.mongodb_database]
        if resolved_settings.mongodb_database
        else mongo_client.get_default_database(default=DEFAULT_DATABASE)
    )
    session_repository = MongoSessionRepository(database["usersessions"])
    solution_repository = MongoSolutionRepository(database["solutions"])
    upload_store = LocalUploadStore.create(resolved_settings.upload_dir)

    chat_client = (
        OpenAIChatClient.create(resolved_settings.openai_api_key)
        if resolved_settings.openai_api_key
        else None
    )
    strategy: SolutionStrategy = TemplateSolutionStrategy()
    if resolved_settings.solution_strategy == "llm" and chat_client is not None:
        strategy = LlmSolutionStrategy(
            client=chat_client, model=resolved_settings.openai_model
        )

    session_service = SessionService(session_repository)
    solve_service = SolveService(
        strategy=strategy,
        repository=solution_repository,
        upload_store=upload_store,
        image_converter=SimulatedImageToText(),
        speech_converter=SimulatedSpeechToText(),
        max_upload_bytes=resolved_settings.max_upload_bytes,
    )
    chat_service = ChatService(client=chat_client, model=resolved_settings.openai_model)

    async def close_resources() -> None:
        if chat_client is not None:
            await chat_client.close()
        mongo_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_service=session_service,
        solve_service=solve_service,
        chat_service=chat_service,
        upload_store=upload_store,
        close_resources=close_resources,
    )
