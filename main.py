import os
import uuid
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict, Optional
from fastapi import Body, FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response

from config import Config
from models import (
    AccuracyResult,
    AttemptRequest,
    AttemptResponse,
    CapabilitiesResponse,
    ChallengeCompleteRequest,
    ChallengeProgressResponse,
    FillerResult,
    PacingFeedback,
    PacingRequest,
    PronunciationSessionResponse,
    SentenceRequest,
    TextRequest,
    TimerCommandRequest,
    TimerCreateRequest,
    TimerResponse,
    TimingAnalysis,
    TimingRequest,
    ToneResult,
)
from services.capabilities import Synthesizer, Transcriber
from services.filler import FillerAnalyzer
from services.progress import ChallengeProgress, InMemoryStore
from services.pronunciation import PronunciationSession
from services.synthesis import ElevenLabsSynthesizer
from services.ticker import TimerDriver
from services.timer import ImpromptuTimer, Stopwatch
from services.timing import SpeechTimingEstimator
from services.tone import ToneAnalyzer
from services.transcription import AssemblyAITranscriber

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

# Initialize services
filler_analyzer = FillerAnalyzer()
tone_analyzer = ToneAnalyzer()
timing_estimator = SpeechTimingEstimator()
transcriber: Transcriber = AssemblyAITranscriber()
synthesizer: Synthesizer = ElevenLabsSynthesizer()
challenge_progress = ChallengeProgress(InMemoryStore())

pronunciation_sessions: Dict[str, PronunciationSession] = {}
timers: Dict[str, TimerDriver] = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    os.makedirs(Config.UPLOAD_DIR, exist_ok=True)
    yield
    for driver in timers.values():
        driver.close()
    timers.clear()


app = FastAPI(title="Speech Practice Service", version="1.0.0", lifespan=lifespan)


def _new_id() -> str:
    return str(uuid.uuid4())[:8]


def _session(session_id: str) -> PronunciationSession:
    session = pronunciation_sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown pronunciation session: {session_id}")
    return session


def _session_response(session_id: str, session: PronunciationSession) -> PronunciationSessionResponse:
    return PronunciationSessionResponse(
        session_id=session_id,
        sentence=session.sentence,
        attempts=session.attempts,
        best_score=session.best_score,
        last_transcript=session.last_transcript,
        last_accuracy=session.last_accuracy,
    )


def _driver(timer_id: str) -> TimerDriver:
    driver = timers.get(timer_id)
    if driver is None:
        raise HTTPException(status_code=404, detail=f"Unknown timer: {timer_id}")
    return driver


def _timer_response(timer_id: str, driver: TimerDriver) -> TimerResponse:
    return TimerResponse(
        timer_id=timer_id,
        ticking=driver.ticking,
        timer=driver.timer.snapshot(),
    )


# Text analysis

@app.post("/analyze/fillers", response_model=Optional[FillerResult])
async def analyze_fillers(request: TextRequest):
    return filler_analyzer.analyze(request.text)


@app.post("/analyze/tone", response_model=Optional[ToneResult])
async def analyze_tone(request: TextRequest):
    return tone_analyzer.analyze(request.text)


@app.post("/analyze/timing", response_model=Optional[TimingAnalysis])
async def analyze_timing(request: TimingRequest):
    return timing_estimator.analyze(request.text, request.target_seconds)


@app.post("/analyze/pacing", response_model=Optional[PacingFeedback])
async def analyze_pacing(request: PacingRequest):
    analysis = timing_estimator.analyze(request.text, request.target_seconds)
    return timing_estimator.live_pacing(analysis, request.elapsed_seconds)


@app.get("/capabilities", response_model=CapabilitiesResponse)
async def capabilities():
    return CapabilitiesResponse(transcription=transcriber.available, synthesis=synthesizer.available)


# Pronunciation practice

@app.post("/pronunciation/sessions", response_model=PronunciationSessionResponse, status_code=201)
async def create_pronunciation_session(request: SentenceRequest):
    try:
        session = PronunciationSession(request.sentence)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session_id = _new_id()
    pronunciation_sessions[session_id] = session
    logging.info(f"[{session_id}] Pronunciation session created")
    return _session_response(session_id, session)


@app.get("/pronunciation/sessions/{session_id}", response_model=PronunciationSessionResponse)
async def get_pronunciation_session(session_id: str):
    return _session_response(session_id, _session(session_id))


@app.post("/pronunciation/sessions/{session_id}/attempts", response_model=Optional[AccuracyResult])
async def score_attempt(session_id: str, request: AttemptRequest):
    return _session(session_id).score(request.transcript)


@app.post("/pronunciation/sessions/{session_id}/audio", response_model=AttemptResponse)
async def score_audio_attempt(session_id: str, file: UploadFile = File(...)):
    """
    Receives a recorded attempt, transcribes it and scores the transcript
    against the session's sentence.
    """
    session = _session(session_id)
    if not transcriber.available:
        raise HTTPException(status_code=503, detail="Speech recognition is not available")

    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    file_extension = Path(file.filename).suffix.lower()
    if file_extension not in Config.ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file format. Allowed: {sorted(Config.ALLOWED_EXTENSIONS)}"
        )

    content = await file.read()
    if len(content) == 0:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(content) > Config.MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="File too large")

    os.makedirs(Config.UPLOAD_DIR, exist_ok=True)
    file_path = os.path.join(Config.UPLOAD_DIR, f"{uuid.uuid4()}{file_extension}")
    try:
        with open(file_path, "wb") as buffer:
            buffer.write(content)

        logging.info(f"[{session_id}] Transcribing attempt from {file.filename}")
        transcript = await transcriber.transcribe(file_path, file.content_type or "audio/wav")
    finally:
        if os.path.exists(file_path):
            os.remove(file_path)

    result = session.score(transcript)
    if result is None:
        raise HTTPException(status_code=502, detail="No speech could be recognised in the recording")
    return AttemptResponse(transcript=transcript, result=result)


@app.put("/pronunciation/sessions/{session_id}/sentence", response_model=PronunciationSessionResponse)
async def change_sentence(session_id: str, request: SentenceRequest):
    session = _session(session_id)
    try:
        session.change_sentence(request.sentence)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _session_response(session_id, session)


@app.post("/pronunciation/sessions/{session_id}/reset", response_model=PronunciationSessionResponse)
async def reset_session(session_id: str):
    session = _session(session_id)
    session.reset()
    return _session_response(session_id, session)


@app.get("/pronunciation/sessions/{session_id}/example")
async def play_example(session_id: str):
    session = _session(session_id)
    if not synthesizer.available:
        raise HTTPException(status_code=503, detail="Speech synthesis is not available")

    audio = await synthesizer.synthesize(session.sentence)
    if audio is None:
        raise HTTPException(status_code=502, detail="Could not synthesize the example sentence")
    return Response(content=audio, media_type="audio/mpeg")


# Timers

@app.post("/timers", response_model=TimerResponse, status_code=201)
async def create_timer(request: TimerCreateRequest):
    if request.kind == "stopwatch":
        timer = Stopwatch(limit_seconds=request.limit_seconds)
    else:
        timer = ImpromptuTimer(
            preparation_seconds=request.preparation_seconds or Config.PREPARATION_SECONDS,
            speech_seconds=request.speech_seconds or Config.SPEECH_SECONDS,
        )

    timer_id = _new_id()
    timers[timer_id] = TimerDriver(timer)
    logging.info(f"[{timer_id}] Created {request.kind} timer")
    return _timer_response(timer_id, timers[timer_id])


@app.get("/timers/{timer_id}", response_model=TimerResponse)
async def get_timer(timer_id: str):
    return _timer_response(timer_id, _driver(timer_id))


@app.post("/timers/{timer_id}/{command}", response_model=TimerResponse)
async def timer_command(timer_id: str, command: str, request: Optional[TimerCommandRequest] = Body(default=None)):
    driver = _driver(timer_id)
    if command not in driver.timer.commands:
        raise HTTPException(status_code=400, detail=f"Unsupported command: {command}")

    request = request or TimerCommandRequest()
    try:
        if command == "select_topic":
            if not request.topic:
                raise HTTPException(status_code=400, detail="A topic is required")
            accepted = driver.dispatch(command, request.topic)
        elif command == "set_durations":
            accepted = driver.dispatch(command, request.preparation_seconds, request.speech_seconds)
        else:
            accepted = driver.dispatch(command)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not accepted:
        raise HTTPException(status_code=409, detail=f"Command {command} is not allowed in the current state")
    return _timer_response(timer_id, driver)


@app.delete("/timers/{timer_id}", status_code=204)
async def delete_timer(timer_id: str):
    driver = _driver(timer_id)
    driver.close()
    del timers[timer_id]
    logging.info(f"[{timer_id}] Timer removed")
    return Response(status_code=204)


# Daily challenge

@app.get("/challenges/progress", response_model=ChallengeProgressResponse)
async def get_challenge_progress(date: Optional[str] = None):
    return ChallengeProgressResponse(
        streak=challenge_progress.streak,
        completed=challenge_progress.completed,
        completed_today=challenge_progress.is_completed(date) if date else None,
    )


@app.post("/challenges/complete", response_model=ChallengeProgressResponse)
async def complete_challenge(request: ChallengeCompleteRequest):
    if not challenge_progress.complete(request.date, request.response):
        raise HTTPException(status_code=409, detail="Challenge already completed or response is empty")

    logging.info(f"Challenge for {request.date} completed, streak {challenge_progress.streak}")
    return ChallengeProgressResponse(
        streak=challenge_progress.streak,
        completed=challenge_progress.completed,
        completed_today=True,
    )


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "Speech Practice Service is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
