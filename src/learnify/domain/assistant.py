"""Canned replies for the floating study helper."""

from learnify.errors import ValidationError

MAX_QUESTION_LENGTH = 1000

_REPLIES = {
    "math": (
        "To solve math problems, first identify what's being asked and the "
        "relevant formulas. Break the problem into smaller steps and solve "
        "systematically."
    ),
    "science": (
        "For science questions, focus on understanding the underlying concepts. "
        "Relate the question to real-world examples to better grasp the principles."
    ),
    "english": (
        "When analyzing literature, consider themes, character development, and "
        "the author's techniques. Support your points with textual evidence."
    ),
    "help": (
        "I can help with math problems, science concepts, literature analysis, "
        "history questions, and general knowledge. Be specific with your questions!"
    ),
    "default": (
        "I'd be happy to help with that. Could you provide more details about "
        "what specifically you're struggling with?"
    ),
}

# Checked in order; the first keyword found picks the reply.
_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("math",), "math"),
    (("science",), "science"),
    (("english", "literature"), "english"),
    (("help",), "help"),
)


def helper_reply(query: str) -> str:
    """Return the helper's reply to a free-text study question."""
    cleaned = query.strip()
    if not cleaned:
        raise ValidationError("Please type a question")
    if len(cleaned) > MAX_QUESTION_LENGTH:
        raise ValidationError(
            f"Please keep questions under {MAX_QUESTION_LENGTH} characters"
        )
    lowered = cleaned.lower()
    for keywords, reply_key in _KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return _REPLIES[reply_key]
    return _REPLIES["default"]
