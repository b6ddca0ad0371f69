"""Subject catalog shown by the wizard."""

MIN_CLASS_LEVEL = 1
MAX_CLASS_LEVEL = 12

SUBJECTS: tuple[str, ...] = (
    "Mathematics",
    "Science",
    "English",
    "Nepali",
    "Social Studies",
    "General Knowledge",
)

EXAMPLE_QUESTIONS: dict[str, str] = {
    "Mathematics": "Solve for x: 2x + 5 = 15",
    "Science": "Explain Newton's Third Law of Motion",
    "English": "Analyze the theme of Romeo and Juliet",
    "Nepali": "मुनामदन कविताको विषयवस्तु के हो?",
    "Social Studies": "What caused the French Revolution?",
    "General Knowledge": "What are the functions of the United Nations?",
}

COMMON_FORMULAS: dict[str, str] = {
    "Mathematics": "Quadratic formula: x = [-b ± √(b² - 4ac)] / 2a",
    "Science": "Newton's Second Law: F = ma (Force = mass × acceleration)",
}


def is_valid_class_level(value: int) -> bool:
    """Return true for class levels the wizard offers."""
    return MIN_CLASS_LEVEL <= value <= MAX_CLASS_LEVEL


def example_question(subject: str | None) -> str:
    """Return the example question for a subject."""
    return EXAMPLE_QUESTIONS.get(subject or "", f"Example question about {subject}")


def formula_hint(subject: str | None) -> str:
    """Return a user-facing formula hint for a subject."""
    formula = COMMON_FORMULAS.get(subject or "")
    if formula:
        return f"Common formula: {formula}"
    return f"No specific formula for {subject}. Check the examples for guidance."
