# textintel/schemas.py
"""Data schemas (Pydantic models) for the engine and the API."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Language(str, Enum):
    """Languages the engine can score."""
    ENGLISH = "en"
    TAMIL = "ta"
    HINDI = "hi"
    TELUGU = "te"

    @property
    def display_name(self) -> str:
        return self.name.title()


class SentimentLabel(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class ThreatLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class PostMetrics(_Frozen):
    likes: int = 0
    shares: int = 0
    comments: int = 0
    reach: int = 0


class SocialMediaPost(_Frozen):
    """A post to analyze. Only `content` and `language` are read by the engine."""
    content: str
    language: Optional[str] = None
    id: Optional[str] = None
    platform: Optional[Literal["twitter", "facebook", "instagram"]] = None
    author: Optional[str] = None
    author_handle: Optional[str] = None
    timestamp: Optional[datetime] = None
    location: Optional[str] = None
    district: Optional[str] = None
    metrics: Optional[PostMetrics] = None
    verified: Optional[bool] = None


class SentimentResult(_Frozen):
    """Polarity of a text: raw score, per-token score, label and confidence."""
    score: float
    comparative: float
    label: SentimentLabel
    confidence: float = Field(ge=0.0, le=1.0)


class HateSpeechResult(_Frozen):
    detected: bool
    confidence: float = Field(ge=0.0, le=1.0)
    categories: List[str] = []


class IntentResult(_Frozen):
    language: Language
    label: SentimentLabel
    confidence: float = Field(ge=0.0, le=1.0)
    source: Literal["classifier", "lexicon"]


class AnalysisResult(_Frozen):
    """Full result for a single post."""
    text: str
    language: Language
    sentiment: SentimentResult
    hate_speech: HateSpeechResult
    keywords: List[str] = []
    crime_related: bool
    threat_level: ThreatLevel


# --- API request models ---

class AnalyzeRequest(BaseModel):
    """Request model for a single text analysis."""
    text: str
    language: Optional[str] = None


class AnalyzeBatchRequest(BaseModel):
    """Request model for batch post analysis. Posts are validated one by one by the engine."""
    posts: List[Any]


class AnalyzeBatchResponse(BaseModel):
    results: List[AnalysisResult]


class LanguagesResponse(BaseModel):
    languages: Dict[str, str]
