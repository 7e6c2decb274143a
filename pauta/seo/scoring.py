"""Composite SEO scoring.

Both profiles read the same :class:`ContentMetrics`; they differ only in
which sub-scores they compute and how they weight them. Every sub-score is
in [0, 100]; the composite is the weighted sum rounded half-up.
"""

import math

from pauta.seo.metrics import analyze_title, compute_metrics
from pauta.seo.models import ContentMetrics, ScoringProfile, SeoAnalysis

PROFILE_WEIGHTS: dict[ScoringProfile, dict[str, float]] = {
    ScoringProfile.WEIGHTED: {
        "keywords": 0.3,
        "structure": 0.3,
        "readability": 0.2,
        "length": 0.2,
    },
    ScoringProfile.BASIC: {
        "title": 0.15,
        "description": 0.15,
        "keyword_in_title": 0.1,
        "keyword_in_description": 0.1,
        "content": 0.2,
        "headings": 0.1,
        "links": 0.1,
        "images": 0.1,
    },
}

EMPTY_CONTENT = "Conteúdo vazio"

# Weakness fragment -> remediation
REMEDIATIONS: list[tuple[str, str]] = [
    ("Densidade de palavras-chave baixa",
     "Aumente a presença de palavras-chave no texto, mantendo-se entre 1-3% de densidade"),
    ("Densidade de palavras-chave muito alta",
     "Reduza a repetição excessiva de palavras-chave para evitar penalizações"),
    ("Palavras-chave alvo não encontradas",
     "Inclua as palavras-chave alvo ao longo do texto, mantendo-se entre 1-3% de densidade"),
    ("Palavra-chave principal ausente no primeiro parágrafo",
     "Inclua a palavra-chave principal naturalmente no primeiro parágrafo"),
    ("Palavras-chave ausentes em cabeçalhos",
     "Incorpore palavras-chave em alguns cabeçalhos H2 ou H3 de forma natural"),
    ("Ausência de cabeçalhos H2",
     "Adicione cabeçalhos H2 para estruturar melhor o conteúdo e facilitar a leitura"),
    ("Poucos cabeçalhos para a extensão do conteúdo",
     "Adicione mais cabeçalhos para dividir o conteúdo em seções menores"),
    ("Excesso de cabeçalhos",
     "Agrupe seções curtas para reduzir o número de cabeçalhos em relação ao texto"),
    ("Ausência de listas para quebrar o texto",
     "Utilize listas ordenadas ou não-ordenadas para melhorar a escaneabilidade"),
    ("Parágrafos muito longos",
     "Divida parágrafos longos em unidades menores, idealmente com menos de 150 caracteres"),
    ("Ausência de dados estruturados",
     "Adicione marcação schema.org para melhorar a compreensão do conteúdo pelos motores de busca"),
    ("Texto de difícil leitura",
     "Simplifique o texto usando frases mais curtas e vocabulário mais acessível"),
    ("Sentenças longas dificultam a leitura",
     "Reduza o comprimento das sentenças, mantendo-as idealmente abaixo de 20 palavras"),
    ("Conteúdo curto",
     "Expanda o conteúdo para pelo menos 750-1000 palavras para maior profundidade e relevância"),
]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ============================================================================
# WEIGHTED profile
# ============================================================================


def _weighted_sub_scores(m: ContentMetrics) -> dict[str, float]:
    kw, st, rd = m.keywords, m.structure, m.readability

    if 1 <= kw.keyword_density <= 3:
        density_points = 25
    elif kw.keyword_density > 0:
        density_points = 15
    else:
        density_points = 0
    keywords = min(
        100.0,
        density_points
        + (15 if kw.primary_keyword_in_first_paragraph else 0)
        + kw.keyword_in_headings / max(1, st.heading_count) * 20,
    )

    structure = min(
        100.0,
        (15 if st.has_h2 else 0)
        + (15 if 0.02 < st.heading_ratio < 0.1 else 0)
        + (10 if st.list_count > 0 else 0)
        + (10 if st.paragraph_count > 5 else 0)
        + (10 if st.avg_paragraph_length < 150 else 0)
        + (20 if st.has_schema else 0)
        + (10 if st.has_images else 0),
    )

    if rd.flesch_score > 60:
        flesch_points = 30
    elif rd.flesch_score > 50:
        flesch_points = 20
    elif rd.flesch_score > 40:
        flesch_points = 10
    else:
        flesch_points = 0
    if rd.avg_sentence_length < 20:
        sentence_points = 20
    elif rd.avg_sentence_length < 25:
        sentence_points = 10
    else:
        sentence_points = 0
    if rd.complex_word_percentage < 0.2:
        complex_points = 20
    elif rd.complex_word_percentage < 0.3:
        complex_points = 10
    else:
        complex_points = 0
    passive_ratio = rd.passive_voice_count / max(1, rd.sentence_count)
    readability = min(
        100.0,
        flesch_points + sentence_points + complex_points + (10 if passive_ratio < 0.1 else 0),
    )

    wc = m.word_count
    if wc >= 1500:
        length = 100.0
    elif wc >= 1000:
        length = 80.0
    elif wc >= 750:
        length = 60.0
    elif wc >= 500:
        length = 40.0
    elif wc >= 300:
        length = 20.0
    else:
        length = 0.0

    return {
        "keywords": float(keywords),
        "structure": float(structure),
        "readability": float(readability),
        "length": length,
    }


def _weighted_findings(m: ContentMetrics) -> tuple[list[str], list[str]]:
    kw, st, rd = m.keywords, m.structure, m.readability
    strengths: list[str] = []
    weaknesses: list[str] = []

    if 1 <= kw.keyword_density <= 3:
        strengths.append("Densidade de palavras-chave ideal (1-3%)")
    elif kw.keyword_density > 3:
        weaknesses.append("Densidade de palavras-chave muito alta (possível keyword stuffing)")
    elif kw.keyword_density > 0:
        weaknesses.append("Densidade de palavras-chave baixa")
    else:
        weaknesses.append("Palavras-chave alvo não encontradas no conteúdo")

    if kw.primary_keyword_in_first_paragraph:
        strengths.append("Palavra-chave principal presente no primeiro parágrafo")
    else:
        weaknesses.append("Palavra-chave principal ausente no primeiro parágrafo")

    if kw.keyword_in_headings > 0:
        strengths.append("Palavras-chave presentes em cabeçalhos")
    else:
        weaknesses.append("Palavras-chave ausentes em cabeçalhos")

    if st.has_h2:
        strengths.append("Uso adequado de cabeçalhos H2")
    else:
        weaknesses.append("Ausência de cabeçalhos H2")

    if 0.02 < st.heading_ratio < 0.1:
        strengths.append("Proporção adequada de cabeçalhos no texto")
    elif st.heading_ratio >= 0.1:
        weaknesses.append("Excesso de cabeçalhos em relação ao conteúdo")
    else:
        weaknesses.append("Poucos cabeçalhos para a extensão do conteúdo")

    if st.list_count > 0:
        strengths.append("Uso de listas para melhorar a escaneabilidade")
    else:
        weaknesses.append("Ausência de listas para quebrar o texto")

    if st.avg_paragraph_length < 150:
        strengths.append("Parágrafos de tamanho adequado para leitura")
    else:
        weaknesses.append("Parágrafos muito longos dificultam a leitura")

    if st.has_schema:
        strengths.append("Presença de dados estruturados (schema.org)")
    else:
        weaknesses.append("Ausência de dados estruturados (schema.org)")

    if rd.flesch_score > 60:
        strengths.append("Texto de fácil leitura (Flesch Reading Ease > 60)")
    elif rd.flesch_score > 50:
        strengths.append("Texto de legibilidade moderada")
    else:
        weaknesses.append("Texto de difícil leitura (Flesch Reading Ease < 50)")

    if rd.avg_sentence_length < 20:
        strengths.append("Sentenças curtas facilitam a compreensão")
    else:
        weaknesses.append("Sentenças longas dificultam a leitura")

    if m.word_count >= 1000:
        strengths.append("Conteúdo longo e abrangente (1000+ palavras)")
    elif m.word_count >= 750:
        strengths.append("Conteúdo de tamanho razoável")
    elif m.word_count < 500:
        weaknesses.append("Conteúdo curto pode não ser suficiente para SEO (menos de 500 palavras)")

    return strengths, weaknesses


# ============================================================================
# BASIC profile
# ============================================================================


def _basic_scores_and_findings(
    m: ContentMetrics,
    title: str | None,
    description: str | None,
) -> tuple[dict[str, float], list[str], list[str]]:
    strengths: list[str] = []
    weaknesses: list[str] = []
    title_lower = (title or "").lower()
    description_lower = (description or "").lower()
    top = m.top_keywords

    title_analysis = analyze_title(title)
    if title_analysis.score >= 90:
        strengths.append(title_analysis.message)
    weaknesses.extend(title_analysis.suggestions)

    description_length = len(description or "")
    if description_length == 0:
        description_score = 0.0
        weaknesses.append("Adicione uma meta description.")
    elif description_length < 50:
        description_score = 30.0
        weaknesses.append("A descrição é muito curta. Ideal: 120-160 caracteres.")
    elif description_length > 160:
        description_score = 60.0
        weaknesses.append("A descrição é muito longa. Limite para 160 caracteres.")
    else:
        description_score = 100.0
        strengths.append("Meta description com tamanho adequado")

    if any(kw in title_lower for kw in top):
        keyword_title_score = 100.0
        strengths.append("Palavras-chave principais presentes no título")
    else:
        keyword_title_score = 40.0
        if top:
            weaknesses.append(
                f"Considere incluir uma das principais palavras-chave no título: {', '.join(top[:3])}"
            )

    if any(kw in description_lower for kw in top):
        keyword_desc_score = 100.0
        strengths.append("Palavras-chave principais presentes na descrição")
    else:
        keyword_desc_score = 40.0
        if top:
            weaknesses.append(
                f"Considere incluir palavras-chave principais na descrição: {', '.join(top[:3])}"
            )

    wc = m.word_count
    if wc < 300:
        content_score = 30.0
        weaknesses.append("O conteúdo é muito curto. Recomendado: mínimo de 500 palavras.")
    elif wc < 500:
        content_score = 60.0
        weaknesses.append("O conteúdo está um pouco curto. Recomendado: 500-2000 palavras.")
    elif wc < 2000:
        content_score = 100.0
        strengths.append("Conteúdo com extensão adequada (500-2000 palavras)")
    else:
        content_score = 90.0
        weaknesses.append("Conteúdo longo é bom, mas certifique-se de que é relevante e envolvente.")

    st = m.structure
    if st.h1_count > 1:
        headings_score = 40.0
        weaknesses.append("Use apenas um H1 por página, normalmente para o título principal.")
    elif st.h1_count == 0:
        headings_score = 50.0
        weaknesses.append("Adicione um cabeçalho H1 para o título principal.")
    else:
        headings_score = 100.0
    if st.h2_count == 0:
        headings_score = min(headings_score, 60.0)
        weaknesses.append("Adicione cabeçalhos H2 para organizar o conteúdo em seções.")
    if st.h2_count > 0 and st.h3_count == 0 and wc > 800:
        weaknesses.append("Considere adicionar cabeçalhos H3 para subseções em artigos mais longos.")
    if headings_score == 100.0:
        strengths.append("Hierarquia de cabeçalhos adequada")

    links_score = 100.0
    if m.links.internal == 0:
        links_score -= 20
        weaknesses.append("Adicione links internos para outros conteúdos relevantes no site.")
    if m.links.external == 0 and wc > 500:
        links_score -= 10
        weaknesses.append(
            "Considere adicionar links para fontes externas confiáveis para aumentar a credibilidade."
        )
    if links_score == 100.0:
        strengths.append("Boa combinação de links internos e externos")

    images_score = 100.0
    if st.image_count == 0 and wc > 300:
        images_score = 60.0
        weaknesses.append(
            "Adicione imagens relevantes para tornar o conteúdo mais atraente e compreensível."
        )
    elif st.image_count > 0 and st.images_with_alt < st.image_count:
        images_score = 70.0
        weaknesses.append("Adicione atributos alt descritivos a todas as imagens.")
    elif st.image_count > 0:
        strengths.append("Imagens com atributos alt descritivos")

    scores = {
        "title": float(title_analysis.score),
        "description": description_score,
        "keyword_in_title": keyword_title_score,
        "keyword_in_description": keyword_desc_score,
        "content": content_score,
        "headings": headings_score,
        "links": links_score,
        "images": images_score,
    }
    return scores, strengths, weaknesses


# ============================================================================
# Public API
# ============================================================================


def get_seo_improvement_suggestions(analysis: SeoAnalysis) -> list[str]:
    """Turn weaknesses into remediation steps, then add one score-band hint.

    BASIC weaknesses are already phrased as actions; those with no canned
    remediation are kept verbatim.
    """
    suggestions: list[str] = []
    for weakness in analysis.weaknesses:
        remediation = next(
            (fix for fragment, fix in REMEDIATIONS if fragment in weakness), None
        )
        if remediation is None and analysis.profile == ScoringProfile.BASIC:
            remediation = weakness
        if remediation and remediation not in suggestions:
            suggestions.append(remediation)

    if analysis.score < 40:
        suggestions.append("Considere uma revisão completa do conteúdo para otimização SEO")
    elif analysis.score < 60:
        suggestions.append("Implemente as sugestões acima para melhorar sua pontuação SEO")
    elif analysis.score < 80:
        suggestions.append("Seu conteúdo está no caminho certo, mas pode ser ainda mais otimizado")

    return suggestions


def analyze_seo_score(
    content: str,
    keywords: list[str] | None = None,
    *,
    title: str | None = None,
    description: str | None = None,
    profile: ScoringProfile = ScoringProfile.WEIGHTED,
) -> SeoAnalysis:
    """Score content for SEO with the given profile.

    Args:
        content: Article body, HTML or markdown
        keywords: Target keywords, primary first (WEIGHTED profile)
        title: Page title (BASIC profile)
        description: Meta description (BASIC profile)
        profile: Weighting scheme to apply

    Returns:
        SeoAnalysis with sub-scores, strengths, weaknesses and suggestions.
        Empty content scores 0 with the single weakness "Conteúdo vazio".
    """
    if not content or not content.strip():
        analysis = SeoAnalysis(score=0, profile=profile, weaknesses=[EMPTY_CONTENT])
        analysis.suggestions = get_seo_improvement_suggestions(analysis)
        return analysis

    metrics = compute_metrics(content, keywords)

    if profile == ScoringProfile.BASIC:
        sub_scores, strengths, weaknesses = _basic_scores_and_findings(metrics, title, description)
    else:
        sub_scores = _weighted_sub_scores(metrics)
        strengths, weaknesses = _weighted_findings(metrics)

    weights = PROFILE_WEIGHTS[profile]
    score = _round_half_up(sum(sub_scores[name] * weight for name, weight in weights.items()))

    analysis = SeoAnalysis(
        score=max(0, min(100, score)),
        profile=profile,
        sub_scores=sub_scores,
        strengths=strengths,
        weaknesses=weaknesses,
        metrics=metrics,
    )
    analysis.suggestions = get_seo_improvement_suggestions(analysis)
    return analysis
