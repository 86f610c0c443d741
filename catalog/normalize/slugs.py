import re

# Bracketed ISO dates, e.g. "[2024-01-01]" in scraped folder names.
_BRACKETED_DATE = re.compile(r"\[\d{4}-\d{2}-\d{2}\]")

# Emoji and pictograph blocks, plus the variation selector / zero-width joiner
# that glue multi-codepoint emoji together.
_EMOJI = re.compile(
    "["
    "\U0001F600-\U0001F64F"
    "\U0001F300-\U0001F5FF"
    "\U0001F680-\U0001F6FF"
    "\U0001F700-\U0001F77F"
    "\U0001F780-\U0001F7FF"
    "\U0001F800-\U0001F8FF"
    "\U0001F900-\U0001F9FF"
    "\U0001FA00-\U0001FA6F"
    "\U0001FA70-\U0001FAFF"
    "\u2600-\u26FF"
    "\u2700-\u27BF"
    "\uFE0F\u200D"
    "]"
)

_DISPLAY_PUNCTUATION = re.compile(r"[!$@#%^&*()_+=\[\]{};':\"\\|,.<>/?~]")
_WHITESPACE = re.compile(r"\s+")

# Character -> ASCII replacement used when building slugs.
TRANSLITERATION: dict[str, str] = {
    **dict.fromkeys("àáâäæãåāăą", "a"),
    **dict.fromkeys("çćč", "c"),
    **dict.fromkeys("đď", "d"),
    **dict.fromkeys("èéêëēėęě", "e"),
    **dict.fromkeys("ğǵ", "g"),
    "ḧ": "h",
    **dict.fromkeys("îïíīįì", "i"),
    "ł": "l",
    "ḿ": "m",
    **dict.fromkeys("ñńǹň", "n"),
    **dict.fromkeys("ôöòóœøōõő", "o"),
    "ṕ": "p",
    **dict.fromkeys("ŕř", "r"),
    **dict.fromkeys("ßśšşș", "s"),
    **dict.fromkeys("ťț", "t"),
    **dict.fromkeys("ûüùúūǘůűų", "u"),
    "ẃ": "w",
    "ẍ": "x",
    **dict.fromkeys("ÿý", "y"),
    **dict.fromkeys("žźż", "z"),
    **dict.fromkeys("·/_,:;", "-"),
}

_TRANSLATE_TABLE = str.maketrans(TRANSLITERATION)
_NON_WORD = re.compile(r"[^\w-]+", re.ASCII)
_DASH_RUN = re.compile(r"-{2,}")


def clean_display_name(value: str | None) -> str:
    """Strip dates, emoji and punctuation from a raw folder/product name."""
    if not value:
        return ""
    cleaned = _BRACKETED_DATE.sub("", value)
    cleaned = _EMOJI.sub("", cleaned)
    cleaned = _DISPLAY_PUNCTUATION.sub("", cleaned)
    return _WHITESPACE.sub(" ", cleaned).strip()


def slugify(value: str | None) -> str:
    """Lowercase, hyphen-separated, ASCII-only token; may be empty."""
    if not value:
        return ""
    slug = _WHITESPACE.sub("-", str(value).lower())
    slug = slug.translate(_TRANSLATE_TABLE)
    slug = slug.replace("&", "-and-")
    slug = _NON_WORD.sub("", slug)
    slug = _DASH_RUN.sub("-", slug)
    return slug.strip("-")
