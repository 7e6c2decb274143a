"""Pydantic models for Exa answer responses."""

from pydantic import BaseModel


class ExaCitation(BaseModel):
    url: str
    title: str = ""
    text: str | None = None
    published_date: str | None = None


class ExaAnswerResponse(BaseModel):
    answer: str
    citations: list[ExaCitation]
    query: str
