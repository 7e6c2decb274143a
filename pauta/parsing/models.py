"""Records produced by the block parser."""

from pydantic import BaseModel, ConfigDict, Field


class ParsedBlock(BaseModel):
    """A delimited block whose field lines were recognized."""

    model_config = ConfigDict(frozen=True)

    fields: dict[str, str]
    raw: str = ""


class ParseFailure(BaseModel):
    """A delimited block that yielded no recognizable field."""

    model_config = ConfigDict(frozen=True)

    reason: str
    raw: str = ""


BlockResult = ParsedBlock | ParseFailure


class Source(BaseModel):
    """A reference returned by the research provider."""

    model_config = ConfigDict(frozen=True)

    title: str = "Título não especificado"
    author: str = "Autor não especificado"
    date: str = "Data não especificada"
    url: str | None = None
    type: str = "Tipo não especificado"
    summary: str = "Resumo não disponível"
    relevance: str = Field(
        default="não especificada",
        description="'alta', 'média', 'baixa' or 'não especificada'",
    )


class FAQ(BaseModel):
    """A question/answer pair."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str
