"""Blog category catalog and content-based category suggestions."""

from pauta.seo.metrics import COMMON_STOPWORDS, strip_tags
from pauta.seo.models import ArticleCategory, CategorySuggestion

ARTICLE_CATEGORIES: tuple[ArticleCategory, ...] = (
    ArticleCategory(
        id="reformas-gerais",
        name="Reformas Gerais",
        description="Informações gerais sobre reformas residenciais e comerciais",
        slug="reformas-gerais",
        keywords=["reforma", "construção", "renovação", "casa", "apartamento", "projeto"],
    ),
    ArticleCategory(
        id="cozinhas",
        name="Cozinhas",
        description="Dicas e inspirações para reformas de cozinhas",
        slug="cozinhas",
        keywords=["cozinha", "armários", "bancada", "eletrodomésticos", "decoração"],
    ),
    ArticleCategory(
        id="banheiros",
        name="Banheiros",
        description="Tudo sobre reformas de banheiros e lavabos",
        slug="banheiros",
        keywords=["banheiro", "lavabo", "pia", "revestimentos", "louças", "metais"],
    ),
    ArticleCategory(
        id="areas-externas",
        name="Áreas Externas",
        description="Reformas e decoração de jardins, varandas e áreas externas",
        slug="areas-externas",
        keywords=["jardim", "varanda", "quintal", "terraço", "área externa", "paisagismo"],
    ),
    ArticleCategory(
        id="decoracao",
        name="Decoração",
        description="Ideias e tendências para decorar ambientes",
        slug="decoracao",
        keywords=["decoração", "design de interiores", "estilo", "tendências", "móveis", "iluminação"],
    ),
    ArticleCategory(
        id="dicas-praticas",
        name="Dicas Práticas",
        description="Sugestões práticas e tutoriais para pequenas reformas e manutenção",
        slug="dicas-praticas",
        keywords=["dicas", "manutenção", "conservação", "faça você mesmo", "DIY", "economia"],
    ),
    ArticleCategory(
        id="sustentabilidade",
        name="Sustentabilidade",
        description="Práticas e materiais sustentáveis para reformas e construção",
        slug="sustentabilidade",
        keywords=["sustentabilidade", "ecológico", "reciclagem", "reúso", "eficiência energética"],
    ),
    ArticleCategory(
        id="custo-beneficio",
        name="Custo-Benefício",
        description="Informações sobre orçamentos, custos e economias em reformas",
        slug="custo-beneficio",
        keywords=["orçamento", "custo", "economia", "investimento", "financiamento", "planejamento"],
    ),
    ArticleCategory(
        id="tendencias",
        name="Tendências",
        description="Novidades e tendências em design, materiais e reformas",
        slug="tendencias",
        keywords=["tendências", "inovação", "novidades", "design", "estilo", "modernidade"],
    ),
    ArticleCategory(
        id="antes-depois",
        name="Antes e Depois",
        description="Casos reais de reformas com comparações do antes e depois",
        slug="antes-depois",
        keywords=["antes e depois", "transformação", "renovação", "mudança", "resultados"],
    ),
)

# Points per hit
NAME_WORD_POINTS = 5
DESCRIPTION_WORD_POINTS = 2
EXACT_NAME_POINTS = 20


def _category_score(category: ArticleCategory, text: str) -> int:
    name_score = sum(
        NAME_WORD_POINTS
        for word in category.name.lower().split()
        if len(word) > 3 and word in text
    )
    description_words = dict.fromkeys(category.description.lower().split())
    description_score = sum(
        DESCRIPTION_WORD_POINTS
        for word in description_words
        if len(word) > 3 and word not in COMMON_STOPWORDS and word in text
    )
    exact_score = EXACT_NAME_POINTS if category.name.lower() in text else 0
    return name_score + description_score + exact_score


def suggest_categories(
    title: str | None,
    content: str | None,
    categories: tuple[ArticleCategory, ...] = ARTICLE_CATEGORIES,
) -> list[CategorySuggestion]:
    """Categories whose name or description words appear in the article, best first.

    Words are matched as substrings of the lowercased title plus tag-free
    content. Ties keep catalog order; categories scoring zero are left out.
    """
    if not title and not content:
        return []

    text = f"{(title or '').lower()} {strip_tags(content or '').lower()}"
    scored = [
        CategorySuggestion(category=category, relevance_score=_category_score(category, text))
        for category in categories
    ]
    ranked = sorted(scored, key=lambda s: s.relevance_score, reverse=True)
    return [s for s in ranked if s.relevance_score > 0]


def categories_by_keywords(
    keywords: list[str],
    categories: tuple[ArticleCategory, ...] = ARTICLE_CATEGORIES,
) -> list[CategorySuggestion]:
    """Categories ranked by the share of keywords found inside their own keyword list."""
    if not keywords:
        return []

    wanted = [k.lower() for k in keywords]
    scored = []
    for category in categories:
        own = [k.lower() for k in category.keywords]
        matches = sum(1 for keyword in wanted if any(keyword in k for k in own))
        scored.append(CategorySuggestion(category=category, relevance_score=matches / len(wanted)))

    ranked = sorted(scored, key=lambda s: s.relevance_score, reverse=True)
    return [s for s in ranked if s.relevance_score > 0]
