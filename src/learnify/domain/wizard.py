"""Question wizard state machine.

The wizard walks a visitor through
``Welcome -> SubjectSelect -> MethodSelect -> QuestionInput -> Loading -> Results``
with forward and back moves only. ``transition`` is pure: it takes the
current state and an event and returns the next state. Events that do not
apply to the current step return the state unchanged. Network calls,
recording, and transcription live in ``learnify.services.wizard``.
"""

from dataclasses import dataclass, replace
from enum import Enum

from learnify.domain.solutions import SolutionPayload, SolveMethod
from learnify.domain.subjects import example_question, formula_hint, is_valid_class_level

MAX_IMAGE_BYTES = 5 * 1024 * 1024
RECORDING_LIMIT_SECONDS = 60.0


class Step(str, Enum):
    """Wizard pages in display order."""

    WELCOME = "welcome"
    SUBJECT_SELECT = "subject"
    METHOD_SELECT = "method"
    QUESTION_INPUT = "question"
    LOADING = "loading"
    RESULTS = "results"


class Tab(str, Enum):
    """Result panes."""

    SOLUTION = "solution"
    EXPLANATION = "explanation"
    RESOURCES = "resources"


class Feedback(str, Enum):
    """Feedback a visitor can leave on a solution."""

    HELPFUL = "helpful"
    NOT_HELPFUL = "not-helpful"


@dataclass(frozen=True)
class PendingFile:
    """A file picked or recorded on the client, not yet submitted."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class WizardState:
    """Everything the wizard knows about the current visit."""

    step: Step = Step.WELCOME
    session_id: str | None = None
    subject: str | None = None
    class_level: int | None = None
    method: SolveMethod | None = None
    question_text: str = ""
    image: PendingFile | None = None
    audio: PendingFile | None = None
    transcript: str = ""
    is_recording: bool = False
    recording_started_at: float | None = None
    current_question: str | None = None
    solution: SolutionPayload | None = None
    active_tab: Tab = Tab.SOLUTION
    feedback: Feedback | None = None
    error: str | None = None
    notice: str | None = None


@dataclass(frozen=True)
class SessionStarted:
    session_id: str


@dataclass(frozen=True)
class GetStarted:
    pass


@dataclass(frozen=True)
class SelectSubject:
    subject: str


@dataclass(frozen=True)
class SelectClass:
    class_level: int


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class SelectMethod:
    method: SolveMethod


@dataclass(frozen=True)
class StartQuestion:
    pass


@dataclass(frozen=True)
class EditText:
    text: str


@dataclass(frozen=True)
class ClearText:
    pass


@dataclass(frozen=True)
class InsertEquation:
    equation: str
    position: int | None = None


@dataclass(frozen=True)
class AttachImage:
    file: PendingFile


@dataclass(frozen=True)
class RemoveImage:
    pass


@dataclass(frozen=True)
class StartRecording:
    at: float


@dataclass(frozen=True)
class StopRecording:
    audio: PendingFile | None


@dataclass(frozen=True)
class TranscriptReady:
    text: str


@dataclass(frozen=True)
class ShowExample:
    pass


@dataclass(frozen=True)
class ShowFormula:
    pass


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class SolutionReceived:
    payload: SolutionPayload
    error: str | None = None


@dataclass(frozen=True)
class SelectTab:
    tab: Tab


@dataclass(frozen=True)
class GiveFeedback:
    feedback: Feedback


@dataclass(frozen=True)
class NewQuestion:
    pass


WizardEvent = (
    SessionStarted
    | GetStarted
    | SelectSubject
    | SelectClass
    | Continue
    | Back
    | SelectMethod
    | StartQuestion
    | EditText
    | ClearText
    | InsertEquation
    | AttachImage
    | RemoveImage
    | StartRecording
    | StopRecording
    | TranscriptReady
    | ShowExample
    | ShowFormula
    | Submit
    | SolutionReceived
    | SelectTab
    | GiveFeedback
    | NewQuestion
)


def can_continue(state: WizardState) -> bool:
    """Return true when subject and class are both chosen."""
    return bool(state.subject) and state.class_level is not None


def can_start(state: WizardState) -> bool:
    """Return true when a submission method is chosen."""
    return state.method is not None


def submission_error(state: WizardState) -> str | None:
    """Return the user-facing reason the question cannot be submitted yet."""
    if state.method is SolveMethod.TEXT and not state.question_text.strip():
        return "Please enter your question"
    if state.method is SolveMethod.IMAGE and state.image is None:
        return "Please upload an image"
    if state.method is SolveMethod.VOICE and not state.transcript.strip():
        return "Please record your question"
    if state.method is None:
        return "Please select a method"
    return None


def can_submit(state: WizardState) -> bool:
    """Return true when the active method's input is complete."""
    return submission_error(state) is None


def image_error(file: PendingFile) -> str | None:
    """Validate a picked image before it is attached."""
    if file.size > MAX_IMAGE_BYTES:
        return f"Please upload images smaller than {MAX_IMAGE_BYTES // (1024 * 1024)}MB"
    if not file.content_type.startswith("image/"):
        return "Please upload a valid image file"
    return None


def recording_expired(state: WizardState, now: float) -> bool:
    """Return true when an active recording reached its time limit."""
    if not state.is_recording or state.recording_started_at is None:
        return False
    return now - state.recording_started_at >= RECORDING_LIMIT_SECONDS


def question_for_submission(state: WizardState) -> str:
    """Return the question text shown above the results."""
    if state.method is SolveMethod.IMAGE and state.image is not None:
        return f"Image question: {state.image.filename}"
    if state.method is SolveMethod.VOICE:
        return state.transcript.strip()
    return state.question_text.strip()


def transition(state: WizardState, event: WizardEvent) -> WizardState:  # noqa: PLR0911
    """Return the state that follows ``event``."""
    state = replace(state, error=None, notice=None)

    if isinstance(event, SessionStarted):
        return replace(state, session_id=event.session_id)
    if isinstance(event, StopRecording):
        return _stop_recording(state, event)
    if isinstance(event, TranscriptReady):
        if state.step in {Step.LOADING, Step.RESULTS}:
            return state
        return replace(state, transcript=event.text)

    if state.step is Step.WELCOME:
        if isinstance(event, GetStarted):
            return replace(state, step=Step.SUBJECT_SELECT)
        return state
    if state.step is Step.SUBJECT_SELECT:
        return _subject_step(state, event)
    if state.step is Step.METHOD_SELECT:
        return _method_step(state, event)
    if state.step is Step.QUESTION_INPUT:
        return _question_step(state, event)
    if state.step is Step.LOADING:
        if isinstance(event, SolutionReceived):
            return replace(
                state,
                step=Step.RESULTS,
                solution=event.payload,
                active_tab=Tab.SOLUTION,
                error=event.error,
            )
        return state
    return _results_step(state, event)


def _subject_step(state: WizardState, event: WizardEvent) -> WizardState:
    if isinstance(event, SelectSubject) and event.subject.strip():
        return replace(state, subject=event.subject.strip())
    if isinstance(event, SelectClass) and is_valid_class_level(event.class_level):
        return replace(state, class_level=event.class_level)
    if isinstance(event, Continue) and can_continue(state):
        return replace(state, step=Step.METHOD_SELECT)
    return state


def _method_step(state: WizardState, event: WizardEvent) -> WizardState:
    if isinstance(event, SelectMethod):
        return replace(state, method=event.method)
    if isinstance(event, StartQuestion) and can_start(state):
        return replace(state, step=Step.QUESTION_INPUT)
    if isinstance(event, Back):
        return replace(state, step=Step.SUBJECT_SELECT)
    return state


def _question_step(  # noqa: PLR0911, PLR0912
    state: WizardState, event: WizardEvent
) -> WizardState:
    if isinstance(event, Back):
        return replace(state, step=Step.METHOD_SELECT)
    if isinstance(event, EditText):
        return replace(state, question_text=event.text)
    if isinstance(event, ClearText):
        return replace(state, question_text="")
    if isinstance(event, InsertEquation):
        equation = event.equation.strip()
        if not equation:
            return state
        text = state.question_text
        position = len(text) if event.position is None else event.position
        position = max(0, min(position, len(text)))
        return replace(
            state, question_text=f"{text[:position]} {equation} {text[position:]}"
        )
    if isinstance(event, AttachImage):
        error = image_error(event.file)
        if error:
            return replace(state, error=error)
        return replace(state, image=event.file)
    if isinstance(event, RemoveImage):
        return replace(state, image=None)
    if isinstance(event, StartRecording):
        if state.method is not SolveMethod.VOICE or state.is_recording:
            return state
        return replace(
            state,
            is_recording=True,
            recording_started_at=event.at,
            audio=None,
            transcript="",
        )
    if isinstance(event, ShowExample):
        example = example_question(state.subject)
        if state.method is SolveMethod.TEXT:
            return replace(state, question_text=example)
        if state.method is SolveMethod.VOICE:
            return replace(state, transcript=example)
        return state
    if isinstance(event, ShowFormula):
        return replace(state, notice=formula_hint(state.subject))
    if isinstance(event, Submit):
        error = submission_error(state)
        if error:
            return replace(state, error=error)
        return replace(
            state,
            step=Step.LOADING,
            current_question=question_for_submission(state),
            solution=None,
            feedback=None,
        )
    return state


def _results_step(state: WizardState, event: WizardEvent) -> WizardState:
    if isinstance(event, SelectTab):
        return replace(state, active_tab=event.tab)
    if isinstance(event, GiveFeedback):
        notice = (
            "Thanks for your feedback!"
            if event.feedback is Feedback.HELPFUL
            else "We'll try to improve!"
        )
        return replace(state, feedback=event.feedback, notice=notice)
    if isinstance(event, NewQuestion):
        return replace(
            state,
            step=Step.METHOD_SELECT,
            question_text="",
            image=None,
            audio=None,
            transcript="",
            is_recording=False,
            recording_started_at=None,
            current_question=None,
            solution=None,
            active_tab=Tab.SOLUTION,
            feedback=None,
        )
    return state


def _stop_recording(state: WizardState, event: StopRecording) -> WizardState:
    if not state.is_recording:
        return state
    return replace(
        state,
        is_recording=False,
        recording_started_at=None,
        audio=event.audio,
    )
