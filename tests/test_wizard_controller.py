"""Tests for the wizard controller."""

import asyncio

import httpx

from learnify.adapters.simulated_converters import SimulatedSpeechToText
from learnify.adapters.solve_api_client import HttpxSolveApiClient
from learnify.api.app import create_app
from learnify.domain.solutions import SolveMethod
from learnify.domain.wizard import (
    RECORDING_LIMIT_SECONDS,
    AttachImage,
    Continue,
    EditText,
    GetStarted,
    PendingFile,
    SelectClass,
    SelectMethod,
    SelectSubject,
    ShowExample,
    StartQuestion,
    Step,
)
from learnify.services.wizard import FALLBACK_ERROR, WizardController
from tests.conftest import (
    PNG_BYTES,
    FakeClock,
    FakeRecorder,
    FakeSolveApi,
    InMemorySolutionRepository,
)


def _controller(
    api: FakeSolveApi, recorder: FakeRecorder | None = None, clock: FakeClock | None = None
) -> WizardController:
    return WizardController(
        api=api,
        transcriber=SimulatedSpeechToText(),
        recorder=recorder or FakeRecorder(),
        clock=clock or FakeClock(),
    )


def _to_question(controller: WizardController, method: SolveMethod) -> None:
    for event in (
        GetStarted(),
        SelectSubject("Mathematics"),
        SelectClass(5),
        Continue(),
        SelectMethod(method),
        StartQuestion(),
    ):
        controller.dispatch(event)


def test_initialize_uses_api_session() -> None:
    controller = _controller(FakeSolveApi())

    state = asyncio.run(controller.initialize())

    assert state.session_id == "session-from-api"


def test_initialize_falls_back_to_local_session() -> None:
    controller = _controller(FakeSolveApi(fail=True))

    state = asyncio.run(controller.initialize())

    assert state.session_id is not None
    assert state.session_id.startswith("session-")
    assert len(state.session_id) == len("session-") + 13


def test_submit_text_shows_server_solution() -> None:
    api = FakeSolveApi()
    controller = _controller(api)
    asyncio.run(controller.initialize())
    _to_question(controller, SolveMethod.TEXT)
    controller.dispatch(EditText("2+2"))

    state = asyncio.run(controller.submit())

    assert state.step is Step.RESULTS
    assert state.solution == api.payload
    assert state.error is None
    assert api.calls[-1] == ("text", "2+2")


def test_submit_falls_back_to_local_solution_on_network_error() -> None:
    controller = _controller(FakeSolveApi(fail=True))
    _to_question(controller, SolveMethod.TEXT)
    controller.dispatch(EditText("2+2"))

    state = asyncio.run(controller.submit())

    assert state.step is Step.RESULTS
    assert state.error == FALLBACK_ERROR
    assert state.solution is not None
    assert "2+2" in state.solution.solution
    assert len(state.solution.resources) == 3


def test_submit_with_incomplete_input_stays_on_question() -> None:
    api = FakeSolveApi()
    controller = _controller(api)
    _to_question(controller, SolveMethod.TEXT)

    state = asyncio.run(controller.submit())

    assert state.step is Step.QUESTION_INPUT
    assert state.error == "Please enter your question"
    assert api.calls == []


def test_submit_image_sends_file() -> None:
    api = FakeSolveApi()
    controller = _controller(api)
    _to_question(controller, SolveMethod.IMAGE)
    image = PendingFile(filename="page.png", content_type="image/png", data=PNG_BYTES)
    controller.dispatch(AttachImage(image))

    state = asyncio.run(controller.submit())

    assert state.step is Step.RESULTS
    assert api.calls[-1] == ("image", image)
    assert state.current_question == "Image question: page.png"


def test_recording_stops_and_transcribes() -> None:
    api = FakeSolveApi()
    recorder = FakeRecorder()
    controller = _controller(api, recorder=recorder)
    _to_question(controller, SolveMethod.VOICE)

    assert controller.start_recording().is_recording
    state = asyncio.run(controller.stop_recording())

    assert recorder.started == 1
    assert recorder.stopped == 1
    assert not state.is_recording
    assert state.transcript.startswith("Voice question (audio/wav")

    state = asyncio.run(controller.submit())
    assert state.step is Step.RESULTS
    assert api.calls[-1] == ("voice", recorder.clip)


def test_tick_stops_recording_at_time_limit() -> None:
    clock = FakeClock()
    recorder = FakeRecorder()
    controller = _controller(FakeSolveApi(), recorder=recorder, clock=clock)
    _to_question(controller, SolveMethod.VOICE)
    controller.start_recording()

    clock.now += RECORDING_LIMIT_SECONDS - 1
    assert asyncio.run(controller.tick()).is_recording

    clock.now += 1
    state = asyncio.run(controller.tick())

    assert not state.is_recording
    assert recorder.stopped == 1
    assert state.transcript


def test_recording_not_started_for_text_method() -> None:
    recorder = FakeRecorder()
    controller = _controller(FakeSolveApi(), recorder=recorder)
    _to_question(controller, SolveMethod.TEXT)

    state = controller.start_recording()

    assert not state.is_recording
    assert recorder.started == 0


def test_unsupported_recording_reports_conversion_error() -> None:
    recorder = FakeRecorder(
        clip=PendingFile(filename="clip.webm", content_type="video/webm", data=b"x")
    )
    controller = _controller(FakeSolveApi(), recorder=recorder)
    _to_question(controller, SolveMethod.VOICE)
    controller.start_recording()

    state = asyncio.run(controller.stop_recording())

    assert state.error == "Cannot transcribe video/webm data"
    assert state.transcript == ""


def test_example_transcript_without_audio_submits_empty_clip() -> None:
    api = FakeSolveApi()
    controller = _controller(api)
    _to_question(controller, SolveMethod.VOICE)
    controller.dispatch(ShowExample())

    state = asyncio.run(controller.submit())

    assert state.step is Step.RESULTS
    assert state.error is None
    method, audio = api.calls[-1]
    assert method == "voice"
    assert isinstance(audio, PendingFile)
    assert audio.data == b""


def test_example_transcript_gets_server_solution(
    container, solution_repository: InMemorySolutionRepository
) -> None:
    async def run() -> WizardController:
        http_client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=create_app(container))
        )
        api = HttpxSolveApiClient(base_url="http://testserver", http_client=http_client)
        controller = WizardController(
            api=api, transcriber=SimulatedSpeechToText(), recorder=FakeRecorder()
        )
        await controller.initialize()
        _to_question(controller, SolveMethod.VOICE)
        controller.dispatch(ShowExample())
        await controller.submit()
        await api.close()
        return controller

    state = asyncio.run(run()).state

    assert state.step is Step.RESULTS
    assert state.error is None
    assert state.current_question == "Solve for x: 2x + 5 = 15"
    record = solution_repository.records[0]
    assert record.session_id == state.session_id
    assert record.question == "Voice question (audio/wav, no audio captured)"
