"""Tests for SEO metrics and both scoring profiles."""

from pauta.seo import (
    ScoringProfile,
    analyze_seo_score,
    analyze_title,
    compute_metrics,
    extract_keywords,
    generate_meta_description,
    get_seo_improvement_suggestions,
)
from pauta.seo.metrics import analyze_keywords, analyze_structure

SENTENCE = "Obra boa exige cuidado."


def _article(sentences_per_paragraph: int, paragraphs: int = 4) -> str:
    body = [" ".join([SENTENCE] * sentences_per_paragraph) for _ in range(paragraphs)]
    return "# Obra bem feita\n\n" + "\n\n".join(body[:2]) + "\n\n## Preparação\n\n" + "\n\n".join(body[2:])


def test_score_bounds():
    samples = [
        "",
        "   ",
        "Texto curto sem estrutura.",
        _article(3),
        _article(80),
        "<h1>Título</h1><p>" + "pintura " * 500 + "</p>",
    ]
    for content in samples:
        for profile in ScoringProfile:
            analysis = analyze_seo_score(content, ["pintura"], profile=profile)
            assert 0 <= analysis.score <= 100


def test_empty_content():
    analysis = analyze_seo_score("")

    assert analysis.score == 0
    assert analysis.weaknesses == ["Conteúdo vazio"]


def test_keyword_density_does_not_lower_keyword_score():
    without = "## Guia de obra\n\n" + " ".join([SENTENCE] * 25)
    with_keyword = without.replace("Obra boa", "Obra pintura", 2)

    low = analyze_seo_score(without, ["pintura"])
    high = analyze_seo_score(with_keyword, ["pintura"])

    assert low.metrics.keywords.keyword_density == 0
    assert 1 <= high.metrics.keywords.keyword_density <= 3
    assert high.sub_scores["keywords"] >= low.sub_scores["keywords"]
    assert high.sub_scores["keywords"] > 0


def test_short_content_scores_lower_than_long_content():
    short = _article(17)
    long = _article(75)
    assert compute_metrics(short).word_count < 300
    assert compute_metrics(long).word_count >= 1200

    basic_short = analyze_seo_score(short, profile=ScoringProfile.BASIC)
    basic_long = analyze_seo_score(long, profile=ScoringProfile.BASIC)
    assert basic_short.sub_scores["content"] < basic_long.sub_scores["content"]

    weighted_short = analyze_seo_score(short)
    weighted_long = analyze_seo_score(long)
    assert weighted_short.sub_scores["length"] < weighted_long.sub_scores["length"]


def test_weighted_findings_and_suggestions():
    analysis = analyze_seo_score("Texto curto sem estrutura.", ["pintura"])

    assert "Ausência de cabeçalhos H2" in analysis.weaknesses
    assert analysis.score < 40
    assert (
        "Adicione cabeçalhos H2 para estruturar melhor o conteúdo e facilitar a leitura"
        in analysis.suggestions
    )
    assert analysis.suggestions[-1] == "Considere uma revisão completa do conteúdo para otimização SEO"


def test_suggestions_are_unique():
    analysis = analyze_seo_score("Texto curto sem estrutura.", ["pintura"])
    suggestions = get_seo_improvement_suggestions(analysis)

    assert len(suggestions) == len(set(suggestions))


def test_basic_profile_uses_title_and_description():
    content = _article(40)
    title = "Guia Completo de Pintura de Fachada para Casas"
    description = "Saiba como planejar a obra da sua casa com cuidado, do orçamento ao acabamento final."

    analysis = analyze_seo_score(
        content, title=title, description=description, profile=ScoringProfile.BASIC
    )

    assert analysis.profile == ScoringProfile.BASIC
    assert set(analysis.sub_scores) == {
        "title",
        "description",
        "keyword_in_title",
        "keyword_in_description",
        "content",
        "headings",
        "links",
        "images",
    }
    assert analysis.sub_scores["title"] == 100
    assert analysis.sub_scores["description"] == 100
    assert "Adicione links internos para outros conteúdos relevantes no site." in analysis.suggestions


def test_analyze_title():
    assert analyze_title("").score == 0
    assert analyze_title(None).message == "Título não fornecido"

    good = analyze_title("Guia Completo de Pintura de Fachada para Casas")
    assert good.score == 100
    assert good.suggestions == []

    short = analyze_title("pintura")
    assert short.score == 40
    assert len(short.suggestions) == 3


def test_extract_keywords_orders_by_frequency():
    extraction = extract_keywords("pintura fachada pintura tinta pintura fachada para")

    assert extraction.top_keywords[:3] == ["pintura", "fachada", "tinta"]


def test_meta_description_length_and_keyword():
    content = "# Título\n\n" + "Texto introdutório sobre reformas residenciais. " * 10
    description = generate_meta_description(content, keywords=["pintura"])

    assert len(description) <= 160
    assert description.endswith("...")
    assert generate_meta_description("") == ""


MIXED = """# Pintura de fachada

<h2>Preparação da pintura</h2>

A pintura começa pela limpeza da parede.

### Ferramentas

- rolo
- trincha

<h4>Detalhes</h4>

##### Nota

<h6>Extra</h6>

<ul><li>lixa</li></ul>

![Fachada pintada](fachada.jpg)

<img src="antes.jpg">

<script type="application/ld+json">{"@type": "Article"}</script>
"""


def test_same_input_gives_identical_output():
    for profile in ScoringProfile:
        first = analyze_seo_score(MIXED, ["pintura"], title="Pintura de fachada", profile=profile)
        second = analyze_seo_score(MIXED, ["pintura"], title="Pintura de fachada", profile=profile)

        assert first.model_dump_json() == second.model_dump_json()


def test_structure_counts_html_and_markdown():
    structure = analyze_structure(MIXED, word_count=40)

    counts = [
        structure.h1_count,
        structure.h2_count,
        structure.h3_count,
        structure.h4_count,
        structure.h5_count,
        structure.h6_count,
    ]
    assert counts == [1, 1, 1, 1, 1, 1]
    assert structure.heading_count == 6
    assert structure.has_h2
    assert structure.list_count == 2
    assert structure.image_count == 2
    assert structure.images_with_alt == 1
    assert structure.has_images
    assert structure.has_schema


def test_structure_without_schema_or_images():
    structure = analyze_structure("## Guia\n\nTexto simples.", word_count=3)

    assert structure.h2_count == 1
    assert structure.image_count == 0
    assert not structure.has_images
    assert not structure.has_schema


def test_keywords_in_headings_and_first_paragraph():
    keywords = analyze_keywords(MIXED, ["pintura", "fachada"])

    assert keywords.keyword_in_headings == 2
    assert keywords.primary_keyword_in_first_paragraph
    assert keywords.keyword_count > 0


def test_first_paragraph_skips_headings():
    only_in_heading = analyze_keywords("# Pintura\n\nLimpe bem a parede.\n\nA pintura vem depois.", ["pintura"])
    html_paragraph = analyze_keywords("<h1>Guia</h1>\n\n<p>Pintura exige preparo.</p>", ["pintura"])

    assert not only_in_heading.primary_keyword_in_first_paragraph
    assert only_in_heading.keyword_in_headings == 1
    assert html_paragraph.primary_keyword_in_first_paragraph


def test_compute_metrics_combines_analyzers():
    metrics = compute_metrics(MIXED, ["pintura"])

    assert metrics.word_count > 0
    assert metrics.structure == analyze_structure(MIXED, metrics.word_count)
    assert metrics.keywords == analyze_keywords(MIXED, ["pintura"])
    assert "pintura" in metrics.top_keywords
