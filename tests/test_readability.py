"""Tests for the Portuguese readability heuristics."""

from pauta.seo import analyze_readability, count_syllables, flesch_reading_ease
from pauta.seo.readability import count_passive_voice, strip_markup


def test_count_syllables_known_words():
    assert count_syllables("casa") == 2
    assert count_syllables("não") == 1


def test_count_syllables_lower_bound():
    assert count_syllables("") == 0
    for word in ["x", "pç", "!!", "rrr", "Fachada", "impermeabilização"]:
        assert count_syllables(word) >= 1


def test_count_syllables_is_deterministic():
    assert count_syllables("reforma") == count_syllables("reforma")


def test_flesch_is_clamped():
    assert flesch_reading_ease(100, 5) == 0.0
    assert flesch_reading_ease(0, 0) == 100.0


def test_strip_markup():
    text = "# Título\n\n**Texto** com [link](https://x.com) e <b>html</b>."
    assert strip_markup(text) == "Título Texto com link e html ."


def test_passive_voice():
    assert count_passive_voice("A parede foi pintada ontem. As telhas são trocadas.") == 2
    assert count_passive_voice("O pintor pintou a parede.") == 0


def test_analyze_readability_counts():
    metrics = analyze_readability("<p>A casa é bonita. O muro caiu!</p>")

    assert metrics.sentence_count == 2
    assert metrics.word_count == 7
    assert metrics.avg_sentence_length == 3.5
    assert 0 <= metrics.flesch_score <= 100


def test_analyze_readability_empty():
    metrics = analyze_readability("")

    assert metrics.sentence_count == 0
    assert metrics.word_count == 0
    assert metrics.avg_sentence_length == 0
