"""Portuguese readability heuristics.

Syllables are estimated from vowel groups, corrected for common diphthongs
and for words ending in a vowel followed by l, r or z. The reading-ease
score uses the Flesch formula ``206.835 - 1.015*ASL - 84.6*ASW`` clamped
to [0, 100].
"""

import re

from pauta.seo.models import ReadabilityMetrics

_PUNCTUATION = re.compile(r"[.,;:!?()\[\]{}'\"]")
_VOWEL_GROUP = re.compile(r"[aáàãâeéêiíoóôõuúü]+")
_FINAL_LIQUID = re.compile(r"[aeiouáàãâéêíóôõúü][lrz]$")
_SENTENCE = re.compile(r"[^.!?]+[.!?]+")
_PASSIVE = re.compile(
    r"\b(?:é|são|foi|foram|ser[áã]o|seriam?)\s+\w+(?:ad|id)[oa]s?\b",
    re.IGNORECASE,
)

DIPHTHONGS = (
    "ai", "ãi", "ei", "éi", "êi", "oi", "ôi", "ui",
    "au", "ão", "eu", "éu", "êu", "iu", "ou",
)

COMPLEX_WORD_SYLLABLES = 3

_TAG = re.compile(r"<[^>]*>")
_MD_IMAGE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
_MD_LINK = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_MD_LINE_MARKER = re.compile(r"^\s*(?:#{1,6}|[-*+>]|\d+[.)])\s+", re.MULTILINE)
_MD_EMPHASIS = re.compile(r"[*_`]{1,3}")


def strip_markup(content: str) -> str:
    """Plain text with HTML tags and markdown syntax removed, whitespace collapsed."""
    text = _TAG.sub(" ", content or "")
    text = _MD_IMAGE.sub(" ", text)
    text = _MD_LINK.sub(r"\1", text)
    text = _MD_LINE_MARKER.sub("", text)
    text = _MD_EMPHASIS.sub("", text)
    return re.sub(r"\s+", " ", text).strip()


def count_syllables(word: str) -> int:
    """Estimate the number of syllables of a Portuguese word.

    Returns 0 for an empty string and at least 1 for anything else.
    """
    if not word:
        return 0

    word = _PUNCTUATION.sub("", word.lower())
    # "gue", "gui", "que", "qui": the u is silent
    word = re.sub(r"gu[ei]", "gi", word)
    word = re.sub(r"qu[ei]", "ki", word)

    count = len(_VOWEL_GROUP.findall(word))
    for diphthong in DIPHTHONGS:
        count -= word.count(diphthong)

    if _FINAL_LIQUID.search(word):
        count += 1

    return max(1, count)


def split_sentences(text: str) -> list[str]:
    """Sentences of plain text: runs ending in ``.``, ``!`` or ``?``."""
    return [s.strip() for s in _SENTENCE.findall(text or "")]


def count_passive_voice(text: str) -> int:
    """Count copula + participle constructions ("foi aplicada", "são usados")."""
    return len(_PASSIVE.findall(text or ""))


def flesch_reading_ease(avg_sentence_length: float, syllables_per_word: float) -> float:
    score = 206.835 - 1.015 * avg_sentence_length - 84.6 * syllables_per_word
    return max(0.0, min(100.0, score))


def analyze_readability(content: str) -> ReadabilityMetrics:
    """Readability metrics of HTML or markdown content."""
    plain = strip_markup(content)
    sentences = split_sentences(plain)

    word_count = 0
    syllable_count = 0
    complex_words = 0
    for sentence in sentences:
        for word in sentence.split():
            if not re.search(r"\w", word):
                continue
            syllables = count_syllables(word)
            word_count += 1
            syllable_count += syllables
            if syllables >= COMPLEX_WORD_SYLLABLES:
                complex_words += 1

    sentence_count = len(sentences)
    avg_sentence_length = word_count / sentence_count if sentence_count else 0.0
    syllables_per_word = syllable_count / word_count if word_count else 0.0

    return ReadabilityMetrics(
        sentence_count=sentence_count,
        word_count=word_count,
        syllable_count=syllable_count,
        avg_sentence_length=avg_sentence_length,
        syllables_per_word=syllables_per_word,
        complex_word_count=complex_words,
        complex_word_percentage=complex_words / word_count if word_count else 0.0,
        passive_voice_count=count_passive_voice(plain),
        flesch_score=flesch_reading_ease(avg_sentence_length, syllables_per_word),
    )
