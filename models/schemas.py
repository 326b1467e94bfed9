from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional, Union
from enum import Enum


class GenerationStyle(str, Enum):
    COMPREHENSIVE = "comprehensive"
    CONCISE = "concise"
    INTERACTIVE = "interactive"


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    HTML = "html"
    JSON = "json"


# Discovery

class DiscoveryRequest(BaseModel):
    query: str = Field(..., min_length=2, description="Query must be at least 2 characters")


class VectorDocument(BaseModel):
    id: str
    title: str
    type: str
    similarity: float = Field(..., ge=0, le=1)
    snippet: str


class DiscoveryResponse(BaseModel):
    documents: List[VectorDocument]
    thoughts: List[str]
    analysis: Optional[str] = None
    curriculumStructure: Optional[Any] = None
    query: str


class QueryAnalysisResponse(BaseModel):
    analysis: str
    query: str


# Generation

class GenerationOptions(BaseModel):
    model: Optional[str] = None
    style: Optional[GenerationStyle] = None
    format: Optional[OutputFormat] = None
    includeCode: bool = False
    includeVisuals: bool = False
    includeChecks: bool = False


class GenerateContentRequest(BaseModel):
    title: str = Field(..., min_length=3, description="Title must be at least 3 characters")
    curriculumId: int
    contentType: str
    difficulty: str
    duration: str
    objectives: str
    instructions: str
    generationOptions: Optional[GenerationOptions] = None


class GeneratedContentResponse(BaseModel):
    id: int
    body: str
    providerModel: str
    contentType: str
    title: str


# Modification

class ModifyContentRequest(BaseModel):
    contentId: int
    modificationType: str
    instructions: str


class ModifiedContentResponse(BaseModel):
    id: int
    newBody: str
    originalBody: str
    modificationType: str
    stats: Dict[str, Any] = {}


# Listing

class RecentContentItem(BaseModel):
    id: int
    title: str
    type: str
    timeAgo: str


class ModelInfo(BaseModel):
    id: str
    display_name: str
    provider: str
    description: str = ""


# Presentation

class ContentPreviewResponse(BaseModel):
    id: int
    contentType: str
    presentation: str
    parsed: bool
    view: Dict[str, Any]


class ContentEditRequest(BaseModel):
    patch: Dict[str, Any]


class QuizScoreRequest(BaseModel):
    selectedAnswers: List[int]


class QuizScoreResponse(BaseModel):
    score: int
    total: int
    percentage: int
    complete: bool


# Vector database

class VectorSearchRequest(BaseModel):
    query: str
    limit: Optional[int] = Field(None, ge=1)


class VectorSearchResponse(BaseModel):
    documents: List[VectorDocument]
    totalFound: int


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: str
    services: Dict[str, Union[str, int]]
