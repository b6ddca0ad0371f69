"""Wizard controller: drives the pure state machine and performs its I/O."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Protocol
from uuid import uuid4

from learnify.adapters.solve_api_client import SolveApi
from learnify.domain.solutions import SolutionPayload, SolveMethod
from learnify.domain.wizard import (
    PendingFile,
    SessionStarted,
    SolutionReceived,
    StartRecording,
    Step,
    StopRecording,
    Submit,
    TranscriptReady,
    WizardEvent,
    WizardState,
    recording_expired,
    transition,
)
from learnify.errors import ConversionError, NetworkError
from learnify.services.conversion import TextConverter
from learnify.services.solutions import TemplateSolutionStrategy

logger = logging.getLogger(__name__)

FALLBACK_ERROR = "Error processing your question. Please try again."


class AudioRecorder(Protocol):
    """Interface for the microphone capture on the client."""

    def start(self) -> None:
        """Begin capturing audio."""

    def stop(self) -> PendingFile | None:
        """Stop capturing and return the recording, if any."""


@dataclass
class WizardController:
    """Holds the wizard state and runs the side effects of each step."""

    api: SolveApi
    transcriber: TextConverter
    recorder: AudioRecorder
    fallback: TemplateSolutionStrategy = field(default_factory=TemplateSolutionStrategy)
    clock: Callable[[], float] = time.monotonic
    state: WizardState = field(default_factory=WizardState)

    def dispatch(self, event: WizardEvent) -> WizardState:
        """Apply a UI event to the current state."""
        self.state = transition(self.state, event)
        return self.state

    async def initialize(self) -> WizardState:
        """Open a backend session, or invent a local id if that fails."""
        try:
            session_id = await self.api.create_session()
        except NetworkError:
            logger.exception("Failed to create session")
            session_id = f"session-{uuid4().hex[:13]}"
        return self.dispatch(SessionStarted(session_id))

    def start_recording(self) -> WizardState:
        """Start capturing a spoken question."""
        state = self.state
        if (
            state.step is not Step.QUESTION_INPUT
            or state.method is not SolveMethod.VOICE
            or state.is_recording
        ):
            return state
        self.recorder.start()
        return self.dispatch(StartRecording(at=self.clock()))

    async def stop_recording(self) -> WizardState:
        """Finish the recording and transcribe it."""
        if not self.state.is_recording:
            return self.state
        audio = self.recorder.stop()
        self.dispatch(StopRecording(audio))
        if audio is None:
            return self.state
        try:
            transcript = await self.transcriber.to_text(audio.data, audio.content_type)
        except ConversionError as exc:
            logger.exception("Failed to transcribe recording")
            self.state = replace(self.state, error=exc.message)
            return self.state
        return self.dispatch(TranscriptReady(transcript))

    async def tick(self) -> WizardState:
        """Finalize the recording once it hits the time limit."""
        if recording_expired(self.state, self.clock()):
            return await self.stop_recording()
        return self.state

    async def submit(self) -> WizardState:
        """Submit the question and always end on the results page."""
        state = self.dispatch(Submit())
        if state.step is not Step.LOADING:
            return state
        try:
            payload = await self._request(state)
        except NetworkError:
            logger.exception(
                "Error processing question",
                extra={"method": state.method, "session_id": state.session_id},
            )
            fallback = await self.fallback.generate(
                state.current_question or "",
                state.subject or "",
                state.class_level or 0,
            )
            return self.dispatch(SolutionReceived(fallback, error=FALLBACK_ERROR))
        return self.dispatch(SolutionReceived(payload))

    async def _request(self, state: WizardState) -> SolutionPayload:
        subject = state.subject or ""
        class_level = state.class_level or 0
        if state.method is SolveMethod.IMAGE and state.image is not None:
            return await self.api.solve_image(
                state.image, subject, class_level, state.session_id
            )
        if state.method is SolveMethod.VOICE:
            audio = state.audio or PendingFile(
                filename="recording.wav", content_type="audio/wav", data=b""
            )
            return await self.api.solve_voice(
                audio, subject, class_level, state.session_id
            )
        return await self.api.solve_text(
            state.current_question or "", subject, class_level, state.session_id
        )
