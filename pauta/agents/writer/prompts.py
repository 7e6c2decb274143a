"""Prompts for the generation, enrichment and metadata calls."""

from pauta.agents.researcher.models import ResearchBundle

PRIMARY_RESEARCH_QUERY = "Pesquise dados atualizados e relevantes sobre: {topic}"

# ============================================================================
# Insights
# ============================================================================

INSIGHTS_SYSTEM_PROMPT = (
    "Você é um especialista em análise de conteúdo. Extraia os 5 fatos mais "
    "importantes e 3 perguntas que precisam de mais pesquisa."
)

INSIGHTS_PROMPT = """Analise esta pesquisa sobre "{topic}" e extraia: 1) 5 fatos principais e dados, 2) 3 perguntas específicas que precisam de mais pesquisa para enriquecer o conteúdo.

Apresente as perguntas em uma seção iniciada por "Perguntas para pesquisa:".

Pesquisa:
{research}"""

# ============================================================================
# Outline and draft
# ============================================================================

OUTLINE_SYSTEM_PROMPT = (
    "Você é um editor profissional especializado em criar estruturas eficazes para artigos."
)

OUTLINE_PROMPT = """Com base nas pesquisas a seguir, crie uma estrutura detalhada para um artigo sobre "{topic}" com tom {tone} para um público {audience}. Inclua título, subtítulos principais e pontos-chave para cada seção.

Pesquisa principal:
{research}

Insights adicionais:
{insights}

Pesquisa secundária:
{secondary}"""

ARTICLE_SYSTEM_PROMPT = (
    "Você é um redator especializado em conteúdo digital otimizado para SEO com alta "
    "qualidade editorial."
)

ARTICLE_PROMPT = """Escreva um artigo completo e otimizado para SEO sobre "{topic}" seguindo esta estrutura:

{outline}

Diretrizes específicas:
- Comece com o título em uma linha iniciada por "# "
- Tom: {tone}
- Público-alvo: {audience}
- Extensão: entre {min_words} e {max_words} palavras
- Estrutura: introdução envolvente, desenvolvimento com subtítulos H2 e H3, conclusão com call-to-action
- Estilo: parágrafos curtos, linguagem clara, exemplos práticos
{sources_line}{faq_line}- Use listas, destaques e quebras de texto para melhorar a legibilidade
- Inclua sugestões naturais de palavras-chave relacionadas
- Estruture o texto para otimização SEO mas mantendo qualidade editorial

Use os dados destas pesquisas como base:

PESQUISA PRINCIPAL:
{research}

PESQUISA SECUNDÁRIA:
{secondary}
{context}"""

SOURCES_LINE = "- Inclua 3-5 referências a fontes confiáveis integradas naturalmente no texto\n"
FAQ_LINE = (
    "- Inclua uma seção de Perguntas Frequentes (FAQ) com 3-5 perguntas/respostas "
    "relevantes ao final\n"
)


def research_context(bundle: ResearchBundle, include_sources: bool, include_faqs: bool) -> str:
    """Structured research the draft may cite, rendered as prompt text."""
    parts = []
    overview = "\n\n".join(
        text
        for text in (
            bundle.overview.technical,
            bundle.overview.costs,
            bundle.overview.regional,
            bundle.trends.market,
            bundle.trends.innovations,
        )
        if text
    )
    if overview:
        parts.append(f"DADOS TÉCNICOS E TENDÊNCIAS:\n{overview}")
    if include_sources and bundle.sources:
        lines = [
            f"- {s.title} ({s.author}, {s.date}){f' - {s.url}' if s.url else ''}"
            for s in bundle.sources
        ]
        parts.append("FONTES DISPONÍVEIS:\n" + "\n".join(lines))
    if include_faqs and bundle.faqs:
        lines = [f"- {f.question}\n  {f.answer}" for f in bundle.faqs]
        parts.append("PERGUNTAS FREQUENTES PESQUISADAS:\n" + "\n".join(lines))
    return "\n\n" + "\n\n".join(parts) if parts else ""


# ============================================================================
# Enrichment
# ============================================================================

ENRICH_ANALYSIS_SYSTEM_PROMPT = "Você é um editor sênior especializado em melhorar conteúdo digital."

ENRICH_ANALYSIS_PROMPT = """Analise este artigo e identifique oportunidades específicas de melhoria nas seguintes áreas:

1. Dados e estatísticas: Onde faltam dados concretos ou estatísticas atualizadas
2. Exemplos práticos: Onde exemplos reais melhorariam a compreensão
3. Contexto: Onde contexto adicional enriqueceria o conteúdo
4. Explicações: Conceitos que poderiam ser explicados com mais clareza
5. Estrutura: Sugestões para melhorar organização e fluidez (se aplicável)

Foco principal: {focus}
{structure_note}

Artigo:
{article}"""

PRESERVE_STRUCTURE_NOTE = (
    "Mantenha a estrutura original do artigo (títulos, subtítulos e organização geral)."
)
FREE_STRUCTURE_NOTE = "Você pode sugerir alterações na estrutura do artigo."

ENRICH_TOPICS_SYSTEM_PROMPT = "Você é um pesquisador especializado em conteúdo digital."

ENRICH_TOPICS_PROMPT = """Com base na análise anterior das oportunidades de melhoria, identifique 3-5 tópicos específicos
para pesquisa complementar que mais enriqueceriam este artigo.

Para cada tópico, forneça:
1. O tópico específico para pesquisa
2. Uma consulta de pesquisa bem formulada para encontrar informações atualizadas
3. Como essa informação enriqueceria o artigo

Use o formato "Tópico: ..." e "Consulta: ..." em linhas separadas.

Análise de oportunidades:
{analysis}

Artigo original:
{article}"""

ENRICH_SYSTEM_PROMPT = (
    "Você é um redator especializado em melhorar conteúdo mantendo estilo original e "
    "otimizando para SEO."
)

ENRICH_PROMPT = """Melhore este artigo incorporando as pesquisas complementares e seguindo as oportunidades
de melhoria identificadas. {structure_note}

Foco principal para enriquecimento: {focus}

Diretrizes:
- Adicione dados atualizados, exemplos relevantes e contexto onde apropriado
- Melhore explicações de conceitos complexos
- Mantenha o tom e estilo original
- Destaque novas informações importantes
- Integre as novas informações naturalmente no texto
- Mantenha a otimização para SEO

Artigo original:
{article}

Análise de oportunidades:
{analysis}

Pesquisas complementares:
{research}"""

PRESERVE_STRUCTURE_SHORT = "Mantenha a estrutura original."
FREE_STRUCTURE_SHORT = "Melhore a estrutura conforme necessário."

ENRICH_SUMMARY_SYSTEM_PROMPT = (
    "Você é um editor especializado em revisão e melhoria de conteúdo."
)

ENRICH_SUMMARY_PROMPT = """Compare o artigo original e a versão enriquecida. Liste as principais melhorias e adições realizadas, destacando como o conteúdo foi aprimorado.

Artigo original:
{original}

Artigo enriquecido:
{enriched}"""

# ============================================================================
# SEO metadata
# ============================================================================

METADATA_SYSTEM_PROMPT = "Você é um especialista em SEO técnico e otimização de conteúdo."

METADATA_PROMPT = """Analise este artigo e gere metadados completos otimizados para SEO.
{topic_line}
Forneça como resposta um objeto JSON com as seguintes propriedades:
- title: Título SEO otimizado (55-60 caracteres)
- description: Meta descrição envolvente (145-155 caracteres)
- keywords: Array com 5-10 palavras-chave relevantes (principais e long-tail)
- canonicalUrl: Sugestão de URL canônica baseada no título
- h1: Tag H1 principal recomendada
- structuredData: Objeto com Schema.org markup recomendado
- openGraph: Objeto com tags para Open Graph
- twitterCard: Objeto com configurações para Twitter Card
- suggestedImagesAlt: Array com 3 sugestões de textos alt para imagens
- estimatedReadTime: Tempo estimado de leitura em minutos
- suggestedCategories: Array com categorias recomendadas para o artigo
- suggestedInternalLinks: Array com 3-5 sugestões de tópicos relacionados para links internos
- faq: Array com 3-5 perguntas e respostas frequentes sugeridas para FAQ Schema

Artigo:
{article}"""
