from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExtractMaterialsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    section_text: Optional[str] = Field(None, alias="sectionText")


class ExtractMaterialsResponse(BaseModel):
    materials: str


class ErrorResponse(BaseModel):
    error: str


class SummaryResult(BaseModel):
    summary: str
    chunk_count: int = Field(..., ge=1)
    chunk_summaries: list[str] = Field(default_factory=list)
    merged: bool = False
    usage: dict[str, Any] = Field(default_factory=dict)


class SectionExtractRequest(BaseModel):
    sections: list[int] = Field(default_factory=list)


class SectionMaterials(BaseModel):
    section_title: str
    pages: list[int] = Field(default_factory=list)
    materials: str
    chunk_count: int = 1


class SectionExtractResponse(BaseModel):
    session_id: str
    results: list[SectionMaterials] = Field(default_factory=list)
