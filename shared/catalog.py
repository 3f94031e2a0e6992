from typing import NamedTuple


class Choice(NamedTuple):
    value: str
    label: str
    icon: str = "fa-solid fa-question"


def lookup(table: dict, value: str, default: str = "Not specified") -> Choice:
    """Descriptor for a catalog value; unknown values get a placeholder label."""
    return table.get(value) or Choice(value, default)


def _table(*choices):
    return {choice.value: choice for choice in choices}


# ========== WIZARD STEPS ==========
class Step(NamedTuple):
    number: int
    title: str
    description: str
    icon: str


STEPS = [
    Step(1, "Define Goal", "What do you want to achieve?", "fa-solid fa-bullseye"),
    Step(2, "Set Context", "Provide background information", "fa-solid fa-brain"),
    Step(3, "Target Audience", "Who is this for?", "fa-solid fa-users"),
    Step(4, "Output & Model", "Format and AI model", "fa-solid fa-file-export"),
    Step(5, "Review & Generate", "Finalize your prompt", "fa-solid fa-wand-magic-sparkles"),
]

# ========== WIZARD CHOICES ==========
OUTPUT_TYPES = _table(
    Choice("text", "Text Content", "fa-solid fa-align-left"),
    Choice("code", "Code Generation", "fa-solid fa-code"),
    Choice("analysis", "Analysis/Research", "fa-solid fa-chart-bar"),
    Choice("creative", "Creative Writing", "fa-solid fa-palette"),
    Choice("marketing", "Marketing Copy", "fa-solid fa-bullhorn"),
    Choice("email", "Email Content", "fa-solid fa-envelope"),
    Choice("social", "Social Media", "fa-solid fa-hashtag"),
    Choice("technical", "Technical Documentation", "fa-solid fa-book"),
)

AI_MODELS = _table(
    Choice("google/gemini-2.5-pro", "Gemini 2.5 Pro - Best for complex reasoning", "fa-solid fa-microscope"),
    Choice("google/gemini-2.5-flash", "Gemini 2.5 Flash - Balanced & fast (Recommended)", "fa-solid fa-scale-balanced"),
    Choice("google/gemini-2.5-flash-lite", "Gemini 2.5 Flash Lite - Fastest & most efficient", "fa-solid fa-bolt"),
)
DEFAULT_MODEL = "google/gemini-2.5-flash"

TONES = _table(
    Choice("professional", "Professional", "fa-solid fa-suitcase"),
    Choice("casual", "Casual", "fa-solid fa-mug-hot"),
    Choice("friendly", "Friendly", "fa-solid fa-face-smile"),
    Choice("formal", "Formal", "fa-solid fa-user-tie"),
    Choice("creative", "Creative", "fa-solid fa-palette"),
    Choice("persuasive", "Persuasive", "fa-solid fa-handshake"),
    Choice("informative", "Informative", "fa-solid fa-circle-info"),
    Choice("conversational", "Conversational", "fa-solid fa-comments"),
)

LENGTHS = _table(
    Choice("short", "Short (1-2 paragraphs)", "fa-solid fa-minus"),
    Choice("medium", "Medium (3-5 paragraphs)", "fa-solid fa-equals"),
    Choice("long", "Long (6+ paragraphs)", "fa-solid fa-bars"),
    Choice("variable", "Variable length", "fa-solid fa-arrows-up-down"),
)

# ========== REWRITER CHOICES ==========
ROLES = _table(
    Choice("general", "General Purpose", "fa-solid fa-users"),
    Choice("developer", "Expert Developer", "fa-solid fa-code"),
    Choice("marketer", "Marketing Professional", "fa-solid fa-bullhorn"),
    Choice("writer", "Content Writer", "fa-solid fa-pen-nib"),
    Choice("analyst", "Data Analyst", "fa-solid fa-chart-line"),
    Choice("designer", "UX/UI Designer", "fa-solid fa-object-group"),
    Choice("teacher", "Educator/Teacher", "fa-solid fa-graduation-cap"),
    Choice("researcher", "Academic Researcher", "fa-solid fa-flask"),
)

REWRITE_TONES = _table(
    Choice("professional", "Professional", "fa-solid fa-suitcase"),
    Choice("casual", "Casual", "fa-solid fa-mug-hot"),
    Choice("technical", "Technical", "fa-solid fa-microchip"),
    Choice("creative", "Creative", "fa-solid fa-palette"),
    Choice("persuasive", "Persuasive", "fa-solid fa-handshake"),
    Choice("friendly", "Friendly", "fa-solid fa-face-smile"),
)

FORMATS = _table(
    Choice("detailed", "Detailed", "fa-solid fa-book"),
    Choice("concise", "Concise", "fa-solid fa-bolt"),
    Choice("structured", "Structured (with sections)", "fa-solid fa-layer-group"),
    Choice("step-by-step", "Step-by-Step", "fa-solid fa-shoe-prints"),
)

# ========== SAVED PROMPTS & TEMPLATES ==========
PROMPT_TYPES = _table(
    Choice("wizard", "Wizard", "fa-solid fa-wand-magic-sparkles"),
    Choice("rewriter", "Rewriter", "fa-solid fa-rotate"),
    Choice("template", "Template", "fa-solid fa-file-lines"),
)

TEMPLATE_CATEGORIES = _table(
    Choice("all", "All Templates", "fa-solid fa-book-open"),
    Choice("writing", "Writing", "fa-solid fa-pen-nib"),
    Choice("coding", "Coding", "fa-solid fa-code"),
    Choice("marketing", "Marketing", "fa-solid fa-bullhorn"),
    Choice("research", "Research", "fa-solid fa-magnifying-glass"),
    Choice("image", "Image Generation", "fa-solid fa-image"),
    Choice("business", "Business", "fa-solid fa-briefcase"),
)
