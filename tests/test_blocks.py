"""Tests for the delimited-block parser."""

from pauta.parsing import (
    ParsedBlock,
    ParseFailure,
    normalize_key,
    parse_block,
    parse_faqs,
    parse_sections,
    parse_sources,
    tokenize_blocks,
)
from pauta.parsing.blocks import SOURCE_FIELDS

FULL_SOURCE = """Aqui estão as fontes encontradas:

[FONTE]
Título: Guia ABNT de Pintura
Autor: ABNT
Data: 2023
URL: https://www.abnt.org.br/guia-pintura
Tipo: Norma técnica
Resumo: Procedimentos para pintura de fachadas.
Relevância: Alta
[/FONTE]
"""


def test_structured_source_fields_match_block():
    sources = parse_sources(FULL_SOURCE)

    assert len(sources) == 1
    source = sources[0]
    assert source.title == "Guia ABNT de Pintura"
    assert source.author == "ABNT"
    assert source.date == "2023"
    assert source.url == "https://www.abnt.org.br/guia-pintura"
    assert source.type == "Norma técnica"
    assert source.summary == "Procedimentos para pintura de fachadas."
    assert source.relevance == "alta"


def test_source_not_available_online_has_no_url():
    text = FULL_SOURCE.replace(
        "URL: https://www.abnt.org.br/guia-pintura", "URL: Não disponível online"
    )
    assert parse_sources(text)[0].url is None


def test_source_missing_fields_use_placeholders():
    sources = parse_sources("[FONTE]\nTítulo: Manual de Tintas\n[/FONTE]")

    assert sources[0].title == "Manual de Tintas"
    assert sources[0].author == "Autor não especificado"
    assert sources[0].url is None


def test_multiline_summary_is_kept_whole():
    text = "[FONTE]\nTítulo: Guia\nResumo: Primeira linha.\nSegunda linha.\n[/FONTE]"
    assert parse_sources(text)[0].summary == "Primeira linha.\nSegunda linha."


def test_bold_and_bulleted_labels_are_recognized():
    text = "[FONTE]\n- **Título:** Guia de Impermeabilização\n**Autor**: IBI\n[/FONTE]"
    source = parse_sources(text)[0]

    assert source.title == "Guia de Impermeabilização"
    assert source.author == "IBI"


def test_legacy_source_format_is_used_as_fallback():
    text = "[Fonte]\nNome: Manual da Tinta\nData: 2022\nInfo: Dicas de aplicação\nURL: http://tintas.com.br"
    sources = parse_sources(text)

    assert len(sources) == 1
    assert sources[0].title == "Manual da Tinta"
    assert sources[0].author == "Não especificado"
    assert sources[0].summary == "Dicas de aplicação"
    assert sources[0].url == "http://tintas.com.br"


def test_text_without_blocks_yields_nothing():
    assert parse_sources("Nenhuma fonte foi encontrada para este tema.") == []
    assert parse_faqs("Sem perguntas.") == []
    assert parse_sources("") == []
    assert parse_faqs(None) == []


def test_block_without_fields_is_skipped():
    text = "[FONTE]\nsem campos reconhecíveis\n[/FONTE]" + FULL_SOURCE
    sources = parse_sources(text)

    assert [s.title for s in sources] == ["Guia ABNT de Pintura"]


def test_structured_faqs():
    text = """[PERGUNTA]
Questão: Qual tinta usar na fachada?
Resposta: Tinta acrílica premium,
resistente à chuva.
[/PERGUNTA]
[PERGUNTA]
Resposta: Resposta sem pergunta.
[/PERGUNTA]"""
    faqs = parse_faqs(text)

    assert len(faqs) == 2
    assert faqs[0].question == "Qual tinta usar na fachada?"
    assert faqs[0].answer == "Tinta acrílica premium,\nresistente à chuva."
    assert faqs[1].question == "Pergunta não especificada"


def test_numbered_faqs_fallback():
    text = "Perguntas comuns:\n1. Quanto custa? Depende da área.\n2. Qual tinta usar? Acrílica.\n3. sem separador"
    faqs = parse_faqs(text)

    assert [f.question for f in faqs] == ["Quanto custa?", "Qual tinta usar?"]
    assert faqs[0].answer == "Depende da área."


def test_heading_normalization():
    sections = parse_sections("Introdução ignorada\n## Especificações Técnicas\nfoo\n## VISÃO GERAL\nbar")

    assert sections["ESPECIFICACOES_TECNICAS"] == "foo"
    assert sections["VISAO_GERAL"] == "bar"
    assert len(sections) == 2


def test_normalize_key():
    assert normalize_key("Análise de Custos") == "ANALISE_DE_CUSTOS"
    assert normalize_key("  contexto   regional ") == "CONTEXTO_REGIONAL"


def test_tokenize_and_parse_block():
    bodies = tokenize_blocks("x [A]um[/A] y [A] dois [/A]", "[A]", "[/A]")
    assert bodies == ["um", "dois"]

    assert isinstance(parse_block("nada aqui", SOURCE_FIELDS), ParseFailure)
    parsed = parse_block("Autor: ABNT", SOURCE_FIELDS)
    assert isinstance(parsed, ParsedBlock)
    assert parsed.fields == {"author": "ABNT"}


def test_numbered_faqs_on_one_line():
    faqs = parse_faqs("1. Quanto custa? Depende da área. 2. Qual tinta usar? Acrílica.")

    assert [f.question for f in faqs] == ["Quanto custa?", "Qual tinta usar?"]
    assert faqs[0].answer == "Depende da área."


def test_year_inside_answer_does_not_start_an_item():
    faqs = parse_faqs("1. Quando a norma mudou? A revisão saiu em 2024. O texto anterior é de 2008.")

    assert len(faqs) == 1
    assert faqs[0].answer == "A revisão saiu em 2024. O texto anterior é de 2008."
