from pydantic import BaseModel, Field


class SentimentAnalysis(BaseModel):
    """Structured sentiment of one journal entry."""
    sentiment: str = Field(description="positive, neutral or negative")
    score: float = Field(description="Polarity from -1.0 (very negative) to 1.0 (very positive)")
    summary: str = Field(description="One or two sentences describing the emotional tone")


class WeeklyReflection(BaseModel):
    """Digest of the most recent entries."""
    summary: str = Field(description="Overall sentiment and themes across the entries")
    prompt: str = Field(description="Writing prompt matched to the mood of the entries")
