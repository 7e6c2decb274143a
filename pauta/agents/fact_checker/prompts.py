"""Prompts for claim extraction, claim classification and report summaries."""

EXTRACTION_SYSTEM_PROMPT = "Você é um especialista em fact-checking e análise de conteúdo."

EXTRACTION_PROMPT = """Identifique as {max_claims} afirmações mais importantes e verificáveis deste artigo. Foque em dados, estatísticas, fatos históricos e declarações definitivas. Retorne apenas a lista numerada das afirmações, sem comentários adicionais.

{article}"""

VERIFICATION_QUERY = 'Verifique a veracidade desta afirmação e cite fontes confiáveis: "{claim}"'

CLASSIFICATION_SYSTEM_PROMPT = (
    "Você é um especialista imparcial em fact-checking. Analise a verificação e "
    "determine a veracidade da afirmação original."
)

CLASSIFICATION_PROMPT = """Afirmação: "{claim}"

Resultado da verificação:
{research}

Forneça uma análise em formato JSON com as seguintes propriedades: verified (boolean), result (string com conclusão), confidence (0-1), sources (array de URLs mencionados), explanation (explicação da análise)"""

SUMMARY_SYSTEM_PROMPT = "Você é um editor especializado em revisão de conteúdo."

SUMMARY_PROMPT = """Analise estes resultados de fact-checking e forneça um resumo conciso sobre a precisão factual do artigo. Destaque padrões, principais problemas e uma avaliação geral da confiabilidade.

Resultados:
{results}"""

NO_CLAIMS_SUMMARY = "Não foram identificadas afirmações verificáveis no texto."
UNVERIFIABLE_RESULT = "Não foi possível verificar esta afirmação."
INVALID_FORMAT_RESULT = "Formato de resposta inválido"
INVALID_FORMAT_EXPLANATION = "Não foi possível analisar o resultado da verificação"
PROCESSING_ERROR_RESULT = "Erro ao processar verificação"
PROCESSING_ERROR_EXPLANATION = "Ocorreu um erro ao tentar analisar o resultado da verificação"
FALLBACK_SUMMARY = "{verified} de {total} afirmações verificadas (confiança média {confidence:.0%})."

# ============================================================================
# Whole-article review
# ============================================================================

REVIEW_PERSONA = (
    "Você é um verificador de fatos especializado em conteúdo técnico sobre construção civil "
    "e reformas residenciais. Sua expertise abrange normas técnicas brasileiras (ABNT), "
    "materiais e técnicas de construção, aspectos regulatórios, e dados de mercado. Sua "
    "análise deve ser rigorosa, objetiva e baseada apenas em fatos verificáveis. Seja "
    "minucioso na identificação de imprecisões e cite sempre fontes confiáveis para correções."
)

THOROUGHNESS_INSTRUCTIONS = {
    "high": (
        "Realize uma verificação factual extremamente detalhada e rigorosa, analisando cada "
        "afirmação técnica, estatística e recomendação. Verifique a precisão de cada dado "
        "numérico e termo técnico."
    ),
    "medium": (
        "Realize uma verificação factual detalhada, focando nas principais afirmações técnicas, "
        "estatísticas importantes e recomendações centrais do artigo."
    ),
    "low": (
        "Realize uma verificação factual básica, identificando apenas problemas factuais "
        "significativos ou erros técnicos graves."
    ),
}

FOCUS_AREA_INSTRUCTIONS = {
    "technical_accuracy": (
        "- Precisão técnica: Verifique se os termos técnicos, processos e especificações estão corretos."
    ),
    "regulatory_compliance": (
        "- Conformidade regulatória: Verifique se as informações sobre normas, códigos e "
        "regulamentações brasileiras (ABNT, etc.) estão corretas e atualizadas."
    ),
    "market_data": (
        "- Dados de mercado: Verifique se os preços, estatísticas e tendências de mercado "
        "mencionados são precisos e atuais."
    ),
    "methodology": (
        "- Metodologia: Verifique se as técnicas, processos e métodos de construção/reforma "
        "descritos são válidos e representam as práticas atuais."
    ),
    "product_claims": (
        "- Afirmações sobre produtos: Verifique se as afirmações sobre desempenho, durabilidade "
        "ou características de produtos e materiais são precisas."
    ),
}

REVIEW_QUERY = """# INSTRUÇÕES DE VERIFICAÇÃO FACTUAL

{thoroughness}

## ÁREAS DE FOCO
{focus_areas}

## CONTEÚDO PARA VERIFICAÇÃO

{content}

## FORMATO DE RESPOSTA

Forneça um relatório de verificação factual estruturado com as seguintes seções:

1. PONTUAÇÃO DE PRECISÃO
- Atribua uma pontuação de precisão geral de 0.0 a 1.0, onde 1.0 é 100% preciso.
- Explique brevemente a justificativa para a pontuação atribuída.

2. PROBLEMAS IDENTIFICADOS
- Liste cada afirmação problemática identificada.
- Para cada problema, forneça:
  * Trecho: o trecho exato ou paráfrase da afirmação problemática
  * Problema: a natureza do problema (imprecisão técnica, dado desatualizado, estatística incorreta, etc.)
  * Correção: a informação correta, citando uma fonte confiável quando possível
  * Gravidade: Crítico, Significativo ou Menor

3. FONTES RECOMENDADAS
- Liste 3-5 fontes técnicas confiáveis e recentes que poderiam melhorar a precisão do conteúdo.
- Para cada fonte, inclua título, autor/organização, ano e URL (quando disponível).

4. RECOMENDAÇÕES DE MELHORIA
- Forneça 3-5 recomendações específicas para melhorar a precisão factual do conteúdo.

5. RESUMO
- Ofereça um resumo objetivo e sucinto (100-150 palavras) sobre a qualidade factual geral do conteúdo, destacando pontos fortes e fracos.

{output_format}"""

REVIEW_JSON_FORMAT = (
    'Formate sua resposta como um objeto JSON válido com as propriedades "precisao" (número), '
    '"problemas" (array de objetos com "trecho", "problema", "correcao" e "gravidade"), '
    '"fontes_recomendadas" (array de strings), "recomendacoes" (array de strings) e "resumo" (string).'
)

REVIEW_TEXT_FORMAT = "Formate sua resposta em texto com títulos claros para cada seção."

REVIEW_FAILED_STATEMENT = "Não foi possível processar o artigo"
REVIEW_FAILED_ISSUE = "Erro técnico durante a verificação"
REVIEW_FAILED_CORRECTION = "Revise manualmente o conteúdo"
REVIEW_FAILED_SEVERITY = "Crítico"
REVIEW_FAILED_IMPROVEMENT = "Realize uma verificação manual do conteúdo"
REVIEW_FAILED_SUMMARY = (
    "Não foi possível realizar a verificação factual automatizada devido a um erro técnico."
)
