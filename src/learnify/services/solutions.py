"""Solution generation strategies."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from html import escape
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from learnify.domain.solutions import SolutionPayload
from learnify.errors import NetworkError
from learnify.services.chat import ChatClient

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "default"


class SolutionStrategy(Protocol):
    """Produces the solution triple for a question."""

    async def generate(
        self, question: str, subject: str, class_level: int
    ) -> SolutionPayload:
        """Return the solution, explanation, and resources."""


def _mathematics(question: str, subject: str) -> SolutionPayload:
    question_html = escape(question)
    return SolutionPayload(
        solution=(
            '<div class="space-y-4">'
            '<div><div class="font-medium">Problem:</div>'
            f'<p class="math-equation">{question_html}</p></div>'
            '<div><div class="font-medium">Solution:</div>'
            '<ol class="list-decimal pl-5 space-y-2">'
            "<li>Identify the variables and constants</li>"
            "<li>Apply appropriate mathematical operations</li>"
            "<li>Solve step by step</li>"
            "</ol></div>"
            '<div class="bg-green-100 dark:bg-green-900 rounded-lg p-3 mt-3">'
            '<div class="font-medium">Answer:</div>'
            f"<p>Solution for {question_html}</p></div>"
            "</div>"
        ),
        explanation=(
            "This is a mathematical problem that requires understanding of core "
            "concepts. The solution involves breaking down the problem into "
            "smaller steps and applying appropriate operations."
        ),
        resources=[
            "Mathematics Textbook - Chapter 5",
            "Khan Academy - Algebra Basics",
            "YouTube: Math Problem Solving Techniques",
        ],
    )


def _science(question: str, subject: str) -> SolutionPayload:
    question_html, subject_html = escape(question), escape(subject)
    return SolutionPayload(
        solution=(
            '<div class="space-y-4">'
            '<div><div class="font-medium">Question:</div>'
            f"<p>{question_html}</p></div>"
            '<div><div class="font-medium">Scientific Explanation:</div>'
            "<p>Based on scientific principles, the answer involves understanding "
            f"core concepts in {subject_html}.</p></div>"
            "</div>"
        ),
        explanation=(
            "This scientific question requires application of fundamental "
            "principles. The explanation breaks down the phenomena into "
            "understandable parts."
        ),
        resources=[
            "Science Journal - Vol. 12",
            f"MIT OpenCourseWare - {subject}",
            "ScienceDirect Research Papers",
        ],
    )


def _default(question: str, subject: str) -> SolutionPayload:
    question_html, subject_html = escape(question), escape(subject)
    return SolutionPayload(
        solution=(
            '<div class="space-y-4">'
            '<div><div class="font-medium">Question:</div>'
            f"<p>{question_html}</p></div>"
            '<div><div class="font-medium">Solution:</div>'
            f"<p>Comprehensive solution for this {subject_html} question.</p></div>"
            "</div>"
        ),
        explanation="Detailed explanation of the concepts involved in this question.",
        resources=[
            f"{subject} Textbook Reference",
            "Online Learning Resources",
            "Educational Videos",
        ],
    )


Template = Callable[[str, str], SolutionPayload]

TEMPLATES: dict[str, Template] = {
    "Mathematics": _mathematics,
    "Science": _science,
    DEFAULT_TEMPLATE: _default,
}


@dataclass
class TemplateSolutionStrategy:
    """Canned solutions looked up by subject, with a default template.

    Templates receive raw text and escape it wherever it lands in the HTML
    ``solution``. ``explanation`` and ``resources`` stay plain text.
    """

    templates: dict[str, Template] = field(default_factory=lambda: dict(TEMPLATES))

    def render(self, question: str, subject: str) -> SolutionPayload:
        """Render the template for ``subject`` synchronously."""
        template = self.templates.get(subject) or self.templates[DEFAULT_TEMPLATE]
        return template(question, subject)

    async def generate(
        self, question: str, subject: str, class_level: int
    ) -> SolutionPayload:
        """Return the canned solution for the subject."""
        return self.render(question, subject)


_LLM_PROMPT = (
    "You are a patient tutor for a class {class_level} student studying "
    "{subject}. Answer the homework question below. Reply with a JSON object "
    'with keys "solution" (plain-text worked solution, one step per line), '
    '"explanation" (plain text), and "resources" (list of 3 short study '
    "resource titles).\n\nQuestion: {question}"
)


@dataclass
class LlmSolutionStrategy:
    """Asks a chat model for the solution; answers from templates on failure."""

    client: ChatClient
    model: str
    fallback: TemplateSolutionStrategy = field(default_factory=TemplateSolutionStrategy)

    async def generate(
        self, question: str, subject: str, class_level: int
    ) -> SolutionPayload:
        """Return the model's solution, or the canned one if the call fails."""
        prompt = _LLM_PROMPT.format(
            class_level=class_level, subject=subject, question=question
        )
        try:
            reply = await self.client.complete(
                prompt, model=self.model, json_output=True
            )
        except NetworkError:
            logger.exception(
                "LLM solution request failed", extra={"subject": subject}
            )
            return await self.fallback.generate(question, subject, class_level)
        payload = _parse_payload(reply)
        if payload is None:
            logger.warning("LLM returned an unusable solution", extra={"subject": subject})
            return await self.fallback.generate(question, subject, class_level)
        return payload


def _parse_payload(reply: str | None) -> SolutionPayload | None:
    """Parse a JSON solution reply, returning None when it is incomplete."""
    if not reply:
        return None
    try:
        payload = SolutionPayload.model_validate(json.loads(reply))
    except (json.JSONDecodeError, PydanticValidationError):
        return None
    if not payload.solution or not payload.explanation or not payload.resources:
        return None
    solution_html = escape(payload.solution.strip()).replace("\n", "<br>\n")
    return payload.model_copy(update={"solution": f"<div>{solution_html}</div>"})
