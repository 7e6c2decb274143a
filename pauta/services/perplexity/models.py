"""Pydantic models for Perplexity chat completion responses."""

from pydantic import BaseModel, Field


class PerplexityMessage(BaseModel):
    role: str
    content: str


class PerplexityChoice(BaseModel):
    index: int = 0
    message: PerplexityMessage


class PerplexitySearchResult(BaseModel):
    """A page the answer was grounded on."""

    title: str = ""
    url: str
    date: str | None = None


class PerplexityResponse(BaseModel):
    """Subset of the chat completion payload the pipeline reads."""

    id: str = ""
    model: str = ""
    choices: list[PerplexityChoice] = Field(default_factory=list)
    citations: list[str] = Field(default_factory=list)
    search_results: list[PerplexitySearchResult] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return self.choices[0].message.content if self.choices else ""
