from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union

from config import Config

class ToneCategory(str, Enum):
    TOO_CASUAL = "Too Casual"
    TOO_FORMAL = "Too Formal"
    PERFECT = "Perfect"
    UNCLEAR = "Unclear"

class PacingStatus(str, Enum):
    ON_TRACK = "on_track"
    NEAR_TARGET = "near_target"
    OVER_TIME = "over_time"

class StopwatchState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"

class SpeechPhase(str, Enum):
    READY = "ready"
    PREPARING = "preparing"
    SPEAKING = "speaking"
    FINISHED = "finished"

# Analysis results

class FillerResult(BaseModel):
    word_count: int
    filler_count: int
    filler_words: List[str]
    estimated_time_seconds: int
    clarity_percent: int

class ToneResult(BaseModel):
    overall: ToneCategory
    formality: int = Field(ge=1, le=10)
    politeness: int = Field(ge=1, le=10)
    clarity: float = Field(ge=1, le=10)
    issues: List[str]
    suggestions: List[str]

class AccuracyResult(BaseModel):
    accuracy_percent: int = Field(ge=0, le=100)
    attempt_number: int = Field(ge=1)
    best_score_so_far: int = Field(ge=0, le=100)

class TimingAnalysis(BaseModel):
    word_count: int
    estimated_time_seconds: int
    words_per_minute: int
    recommendations: List[str]

class PacingFeedback(BaseModel):
    current_wpm: int
    feedback: str
    status: PacingStatus
    elapsed: str
    estimated: str

# Timer snapshots

class StopwatchSnapshot(BaseModel):
    kind: Literal["stopwatch"] = "stopwatch"
    state: StopwatchState
    elapsed_seconds: int
    limit_seconds: Optional[int] = None
    remaining_seconds: Optional[int] = None
    time_up: bool
    display: str

class ImpromptuSnapshot(BaseModel):
    kind: Literal["impromptu"] = "impromptu"
    phase: SpeechPhase
    topic: Optional[str] = None
    preparation_elapsed: int
    preparation_seconds: int
    speech_elapsed: int
    speech_seconds: int
    display: str

# Sessions and progress

class PronunciationSessionResponse(BaseModel):
    session_id: str
    sentence: str
    attempts: int
    best_score: int
    last_transcript: Optional[str] = None
    last_accuracy: Optional[int] = None

class AttemptResponse(BaseModel):
    transcript: str
    result: AccuracyResult

class TimerResponse(BaseModel):
    timer_id: str
    ticking: bool
    timer: Union[StopwatchSnapshot, ImpromptuSnapshot] = Field(discriminator="kind")

class ChallengeProgressResponse(BaseModel):
    streak: int
    completed: List[str]
    completed_today: Optional[bool] = None

class CapabilitiesResponse(BaseModel):
    transcription: bool
    synthesis: bool

# Requests

class TextRequest(BaseModel):
    text: str

class TimingRequest(BaseModel):
    text: str
    target_seconds: int = Field(default=Config.DEFAULT_TARGET_SECONDS, gt=0)

class PacingRequest(TimingRequest):
    elapsed_seconds: int = Field(ge=0)

class SentenceRequest(BaseModel):
    sentence: str = Field(min_length=1)

class AttemptRequest(BaseModel):
    transcript: str

class TimerCreateRequest(BaseModel):
    kind: Literal["stopwatch", "impromptu"]
    limit_seconds: Optional[int] = Field(default=None, ge=0)
    preparation_seconds: Optional[int] = Field(default=None, gt=0)
    speech_seconds: Optional[int] = Field(default=None, gt=0)

class TimerCommandRequest(BaseModel):
    topic: Optional[str] = None
    preparation_seconds: Optional[int] = Field(default=None, gt=0)
    speech_seconds: Optional[int] = Field(default=None, gt=0)

class ChallengeCompleteRequest(BaseModel):
    date: str = Field(min_length=1)
    response: str
