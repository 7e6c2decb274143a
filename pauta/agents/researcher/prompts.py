"""Prompts for the staged research queries.

The section headings and block formats requested here are exactly what
``pauta.parsing`` reads back; change them together.
"""

SKIP_SECTION = "(Pule esta seção)"

OVERVIEW_PERSONA = (
    "Você é um especialista técnico em construção civil e reformas com conhecimento "
    "profundo do mercado brasileiro. Forneça apenas informações verificáveis, baseadas "
    "em dados atuais e de alta qualidade técnica."
)

OVERVIEW_QUERY = """Forneça uma análise abrangente e atualizada sobre "{topic}" no contexto de reformas e construção civil no Brasil.

Por favor, estruture sua resposta com as seguintes seções claramente delimitadas:

## VISÃO GERAL
Uma introdução completa ao tema que explique o contexto atual, importância e aplicações principais. (300-400 palavras)

## ESPECIFICAÇÕES TÉCNICAS
Dados técnicos específicos, considerações normativas (ABNT/normas brasileiras aplicáveis) e parâmetros mensuráveis. Inclua números precisos quando disponíveis. (200-250 palavras)
{technical_skip}

## ANÁLISE DE CUSTOS
Faixas de preço atuais no mercado brasileiro, fatores que influenciam os custos e considerações de custo-benefício. Use dados dos últimos dois anos sempre que possível. (150-200 palavras)
{costs_skip}

## CONTEXTO REGIONAL
Considerações específicas para o mercado brasileiro, incluindo disponibilidade de materiais, práticas comuns e adaptações climáticas regionais. (150-200 palavras)
{regional_skip}

Mantenha uma abordagem estritamente factual, priorizando informações verificáveis e atuais. Cite fontes específicas quando mencionar estatísticas ou dados específicos."""

TRENDS_PERSONA = (
    "Você é um analista de tendências do mercado de construção civil especializado em "
    "identificar e avaliar tendências emergentes e inovações técnicas. Seu foco é "
    "fornecer insights atualizados com base em fontes confiáveis do setor."
)

TRENDS_QUERY = """Identifique as tendências mais recentes e inovações emergentes relacionadas a "{topic}" no contexto de reformas e construção civil.

Estruture sua resposta nos seguintes tópicos:

## TENDÊNCIAS DE MERCADO
Principais tendências observadas nos últimos 12 meses, com dados estatísticos quando disponíveis. (150-200 palavras)

## INOVAÇÕES TÉCNICAS
Avanços recentes em materiais, métodos ou tecnologias relevantes para {topic}. Foque em inovações com aplicação prática. (150-200 palavras)

## PREVISÕES
Expectativas do mercado para os próximos 12-24 meses, baseadas em análises de especialistas do setor. (100-150 palavras)

Forneça informações concretas e específicas, evitando generalidades. Mencione sempre o período/data da informação (mês/ano) para contextualização temporal."""

SOURCES_PERSONA = (
    "Você é um bibliotecário de referências técnicas especializado em construção civil e "
    "reformas. Seu objetivo é identificar e catalogar fontes de alta qualidade, recentes e "
    "relevantes, priorizando conteúdo técnico verificável e especializado. Formate "
    "rigorosamente cada fonte conforme solicitado."
)

SOURCES_QUERY = """Identifique {max_sources} fontes confiáveis, específicas e recentes com informações técnicas sobre "{topic}" no contexto de reformas e construção civil no Brasil.

Para cada fonte, forneça os seguintes dados em formato claramente estruturado:

1. Título completo da publicação/artigo
2. Autor ou organização responsável
3. Data exata de publicação (mês/ano, ou dia/mês/ano se disponível)
4. URL completa e funcional (quando disponível online)
5. Tipo de fonte (artigo técnico, norma ABNT, publicação acadêmica, site especializado, etc.)
6. Resumo conciso dos principais pontos relevantes (2-3 frases)
7. Relevância (alta, média ou baixa) para o tema específico

Inclua apenas fontes que contenham dados técnicos verificáveis e de qualidade. Priorize fontes brasileiras, mas inclua referências internacionais relevantes quando apropriado.

Para facilitar o processamento posterior, formate cada fonte usando exatamente este padrão estruturado:

[FONTE]
Título: (título completo)
Autor: (nome do autor/organização)
Data: (data de publicação)
URL: (url completa se disponível, ou "Não disponível online")
Tipo: (tipo de fonte)
Resumo: (resumo conciso)
Relevância: (alta/média/baixa)
[/FONTE]"""

FAQ_PERSONA = (
    "Você é um especialista técnico que responde perguntas sobre construção civil e "
    "reformas. Seu objetivo é identificar dúvidas genuinamente relevantes e fornecer "
    "respostas técnicas precisas, baseadas em fatos verificáveis e conhecimento "
    "especializado. Mantenha suas respostas objetivas e tecnicamente corretas."
)

FAQ_QUERY = """Crie uma seção de FAQ (Perguntas Frequentes) técnicas sobre "{topic}" no contexto de reformas e construção civil.

Identifique 5-7 perguntas genuinamente frequentes e relevantes, baseadas em dúvidas comuns de:
- Proprietários de imóveis planejando reformas
- Profissionais da construção civil
- Questões técnicas específicas sobre materiais, métodos ou regulamentações

Para cada pergunta:
1. Formule uma questão clara e direta
2. Forneça uma resposta técnica precisa, baseada em fatos verificáveis
3. Mantenha cada resposta concisa (3-5 frases)
4. Inclua referências específicas a normas técnicas ou fontes quando relevante

Evite perguntas genéricas ou óbvias. Foque em dúvidas específicas e técnicas que realmente agregam valor.

Formato:

[PERGUNTA]
Questão: (texto da pergunta)
Resposta: (resposta técnica precisa)
[/PERGUNTA]"""

DEGRADED_OVERVIEW = "Não foi possível obter informações detalhadas sobre {topic}."


def build_query(persona: str, query: str) -> str:
    """Research providers take one question; the persona leads it."""
    return f"{persona}\n\n{query}"


def build_overview_query(
    topic: str,
    include_technical_data: bool,
    include_cost_estimates: bool,
    include_local_context: bool,
) -> str:
    query = OVERVIEW_QUERY.format(
        topic=topic,
        technical_skip="" if include_technical_data else SKIP_SECTION,
        costs_skip="" if include_cost_estimates else SKIP_SECTION,
        regional_skip="" if include_local_context else SKIP_SECTION,
    )
    return build_query(OVERVIEW_PERSONA, query)


def build_trends_query(topic: str) -> str:
    return build_query(TRENDS_PERSONA, TRENDS_QUERY.format(topic=topic))


def build_sources_query(topic: str, max_sources: int) -> str:
    return build_query(SOURCES_PERSONA, SOURCES_QUERY.format(topic=topic, max_sources=max_sources))


def build_faq_query(topic: str) -> str:
    return build_query(FAQ_PERSONA, FAQ_QUERY.format(topic=topic))


RELATED_QUESTIONS_SYSTEM_PROMPT = (
    "Você é um pesquisador de conteúdo para um blog de reformas residenciais. "
    "Formule perguntas objetivas que orientem buscas complementares."
)

RELATED_QUESTIONS_PROMPT = """Com base no tópico "{topic}" e nos seguintes fatos conhecidos, gere 3-5 perguntas importantes e específicas para pesquisa adicional que ajudariam a criar um artigo mais aprofundado.

FATOS CONHECIDOS:
{facts}

DIRETRIZES:
- Formule perguntas que explorem aspectos ainda não cobertos pelos fatos
- Foque em perguntas que gerariam informações práticas e úteis
- Evite perguntas genéricas ou muito amplas
- Priorize perguntas relacionadas a estatísticas recentes, estudos, tendências ou exemplos práticos
- As perguntas devem ser específicas e direcionadas para busca

Retorne apenas a lista numerada de perguntas, sem comentários adicionais."""

DEFAULT_RELATED_QUESTIONS = (
    "Quais são as tendências recentes em {topic}?",
    "Quais são os principais desafios relacionados a {topic}?",
    "Quais são os benefícios de {topic}?",
)
