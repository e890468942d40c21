"""Ingredient name normalization for display and comparison."""

import re
from dataclasses import dataclass, field

# =============================================================================
# Vocabulary
# =============================================================================

# Verbs that introduce a trailing preparation clause: "onion, finely chopped"
PREP_VERBS: frozenset[str] = frozenset(
    {"chopped", "sliced", "diced", "minced", "grated", "crushed", "ground"}
)

# Leading quality descriptors dropped from the comparison key
QUALITY_DESCRIPTORS: frozenset[str] = frozenset({"fresh", "dried", "frozen", "canned"})

# Connectives removed when they stand alone between other words
STOP_WORDS: frozenset[str] = frozenset({"and", "or", "with", "for", "in", "on", "at", "by"})

_HTML_TAG = re.compile(r"<[^>]+>")
_BULLETS = re.compile(r"^[-–•*·⁕◦▪▸○●✓✔☐☑]+\s*")
_PARENTHETICAL = re.compile(r"\(([^)]*)\)")
_LEADING_THE = re.compile(r"^the\s+", re.IGNORECASE)
_EDGE_PUNCTUATION = re.compile(r"^[\s,;:]+|[\s,;:]+$")


def _alternation(words: frozenset[str]) -> str:
    return "|".join(sorted(re.escape(w) for w in words))


@dataclass(frozen=True)
class NameRules:
    """Word lists driving name cleanup, with their compiled patterns."""

    prep_verbs: frozenset[str] = PREP_VERBS
    descriptors: frozenset[str] = QUALITY_DESCRIPTORS
    stop_words: frozenset[str] = STOP_WORDS

    prep_clause: re.Pattern = field(init=False, repr=False, compare=False)
    leading_descriptor: re.Pattern = field(init=False, repr=False, compare=False)
    stop_word: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "prep_clause",
            re.compile(
                rf",\s*((?:\w+ly\s+)?(?:{_alternation(self.prep_verbs)})\b.*)$",
                re.IGNORECASE,
            ),
        )
        object.__setattr__(
            self,
            "leading_descriptor",
            re.compile(rf"^(?:{_alternation(self.descriptors)})\s+", re.IGNORECASE),
        )
        object.__setattr__(
            self,
            "stop_word",
            re.compile(rf"(?<=\s)(?:{_alternation(self.stop_words)})(?=\s)", re.IGNORECASE),
        )


DEFAULT_NAME_RULES = NameRules()


def _collapse(text: str) -> str:
    return " ".join(text.split())


# =============================================================================
# Public API
# =============================================================================


def clean_line(text: str) -> str:
    """
    Clean a raw ingredient line before parsing.

    - Remove HTML tags
    - Remove leading bullet glyphs ("- ", "• ", "✓ ")
    - Collapse whitespace
    """
    text = _HTML_TAG.sub(" ", text)
    text = _collapse(text)
    return _BULLETS.sub("", text)


def split_note(name: str, rules: NameRules = DEFAULT_NAME_RULES) -> tuple[str, str | None]:
    """
    Separate an item name from its parenthetical asides and prep clause.

    Examples:
        "butter (softened)" -> ("butter", "softened")
        "onion, finely chopped" -> ("onion", "finely chopped")
        "The Tomatoes (14 oz), diced" -> ("Tomatoes", "14 oz; diced")

    Case is preserved; the result is suitable for display.
    """
    name = _collapse(name)

    notes = [aside.strip() for aside in _PARENTHETICAL.findall(name) if aside.strip()]
    name = _PARENTHETICAL.sub(" ", name)
    name = _collapse(name)

    prep = rules.prep_clause.search(name)
    if prep:
        notes.append(prep.group(1).strip())
        name = name[: prep.start()]

    name = _LEADING_THE.sub("", name)
    name = _EDGE_PUNCTUATION.sub("", _collapse(name))

    return name, "; ".join(notes) or None


def clean_display_name(name: str, rules: NameRules = DEFAULT_NAME_RULES) -> str:
    """Display cleanup of an item name: asides and prep clause removed, case kept."""
    return split_note(name, rules)[0]


def normalize_name(name: str, rules: NameRules = DEFAULT_NAME_RULES) -> str:
    """
    Normalize an ingredient name into a comparison key.

    - Lowercase, collapse whitespace
    - Remove parenthetical notes and trailing prep clauses
    - Remove a leading quality descriptor (fresh, dried, ...) and "the"
    - Remove standalone connectives (and, or, with, ...)

    The key is never shown to users.
    """
    if not name:
        return ""

    key = _collapse(name.lower())
    key = _collapse(_PARENTHETICAL.sub(" ", key))

    prep = rules.prep_clause.search(key)
    if prep:
        key = key[: prep.start()]

    key = rules.leading_descriptor.sub("", key.strip())
    key = _LEADING_THE.sub("", key)
    key = rules.stop_word.sub(" ", key)

    return _EDGE_PUNCTUATION.sub("", _collapse(key))
