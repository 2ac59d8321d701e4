"""
Segmenter for the stylometric pipeline.

Handles:
  - Homoglyph/Unicode cleanup
  - Word tokenization (lower-cased alphabetic runs)
  - Sentence splitting with protected abbreviations
  - Paragraph segmentation

Everything downstream consumes only the token and sentence sequences
produced here (plus the raw text for phrase-level features).
"""

import re
import unicodedata


# --- Homoglyph normalization map ---
# Common Unicode lookalikes injected into Latin text
HOMOGLYPH_MAP = {
    # Cyrillic lookalikes
    "\u0410": "A", "\u0412": "B", "\u0421": "C", "\u0415": "E",
    "\u041d": "H", "\u041a": "K", "\u041c": "M", "\u041e": "O",
    "\u0420": "P", "\u0422": "T", "\u0425": "X",
    "\u0430": "a", "\u0435": "e", "\u043e": "o", "\u0440": "p",
    "\u0441": "c", "\u0443": "y", "\u0445": "x",
    # Greek lookalikes
    "\u0391": "A", "\u0392": "B", "\u0395": "E", "\u0397": "H",
    "\u0399": "I", "\u039a": "K", "\u039c": "M", "\u039d": "N",
    "\u039f": "O", "\u03a1": "P", "\u03a4": "T", "\u03a7": "X",
    "\u03b1": "a", "\u03bf": "o",
}

INVISIBLE_RE = re.compile(
    r"[\u200b\u200c\u200d\u200e\u200f"   # Zero-width chars, direction marks
    r"\u202a\u202b\u202c\u202d\u202e"      # Bidirectional formatting
    r"\u2060\u2061\u2062\u2063\u2064"       # Word joiner, invisible operators
    r"\u2066\u2067\u2068\u2069"              # Isolate marks
    r"\ufeff"                                 # BOM
    r"\u00ad"                                 # Soft hyphen
    r"]"
)

TOKEN_RE = re.compile(r"\b[a-z]+(?:['-][a-z]+)*\b", re.ASCII)
SENTENCE_BREAK_RE = re.compile(r"[.!?]+")
PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n+")

# Abbreviations whose periods must not end a sentence
PROTECTED_ABBREVIATIONS = ("i.e.", "e.g.", "etc.", "dr.", "mr.", "mrs.", "ms.", "prof.")
ABBREVIATION_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(a) for a in PROTECTED_ABBREVIATIONS) + r")",
    flags=re.IGNORECASE,
)
# Private-use delimiters never produced by the tokenizer or the splitter
PLACEHOLDER_RE = re.compile("\ue000(\\d+)\ue001")


def normalize_unicode(text: str) -> str:
    """
    Normalize Unicode lookalikes without touching layout.

    1. Apply NFKC normalization (full-width, compatibility chars)
    2. Replace known homoglyphs with ASCII equivalents
    3. Strip zero-width and invisible characters

    Line breaks are preserved so paragraph features still work.
    """
    text = unicodedata.normalize("NFKC", text)
    for homoglyph, replacement in HOMOGLYPH_MAP.items():
        text = text.replace(homoglyph, replacement)
    return INVISIBLE_RE.sub("", text)


def tokenize(text: str) -> list[str]:
    """
    Lower-case the text and extract ASCII alphabetic runs (internal ' or - allowed).

    Word boundaries are ASCII-only, so an accented letter splits a word
    ("caf\u00e9" -> "caf") rather than dropping it.
    """
    if not text:
        return []
    return TOKEN_RE.findall(text.lower())


def split_sentences(text: str) -> list[str]:
    """
    Split text on runs of sentence-ending punctuation.

    Protected abbreviations are swapped for placeholders before splitting and
    restored verbatim afterwards. Segments are trimmed; empty ones dropped.
    """
    if not text:
        return []

    protected: list[str] = []

    def _protect(match: re.Match) -> str:
        protected.append(match.group(0))
        return f"\ue000{len(protected) - 1}\ue001"

    processed = ABBREVIATION_RE.sub(_protect, text)

    sentences = []
    for segment in SENTENCE_BREAK_RE.split(processed):
        restored = PLACEHOLDER_RE.sub(lambda m: protected[int(m.group(1))], segment).strip()
        if restored:
            sentences.append(restored)
    return sentences


def sentence_lengths(sentences: list[str]) -> list[int]:
    """Token count of each sentence."""
    return [len(tokenize(s)) for s in sentences]


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, dropping empty paragraphs."""
    if not text:
        return []
    return [p.strip() for p in PARAGRAPH_BREAK_RE.split(text) if p.strip()]


def segment(text: str, normalize: bool = True) -> dict:
    """
    Full segmentation pass.

    Returns:
        dict with keys:
            - "text": the (optionally normalized) text
            - "tokens": normalized word tokens
            - "sentences": raw sentence strings
            - "sentence_lengths": token count per sentence
            - "paragraphs": paragraph strings
    """
    if normalize:
        text = normalize_unicode(text)
    sentences = split_sentences(text)
    return {
        "text": text,
        "tokens": tokenize(text),
        "sentences": sentences,
        "sentence_lengths": sentence_lengths(sentences),
        "paragraphs": split_paragraphs(text),
    }
