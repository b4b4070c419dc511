from dotenv import load_dotenv
import os

load_dotenv()

# Configuration class for the application
class Config:
    # Speech capabilities. A missing key marks the capability unavailable.
    ASSEMBLYAI_API_KEY = os.getenv("ASSEMBLYAI_API_KEY")
    ELEVENLABS_API_KEY = os.getenv("ELEVENLABS_API_KEY")
    ELEVENLABS_VOICE_ID = os.getenv("ELEVENLABS_VOICE_ID", "EXAVITQu4vr4xnSDxMaL")
    ELEVENLABS_MODEL_ID = os.getenv("ELEVENLABS_MODEL_ID", "eleven_multilingual_v2")

    # Network configuration
    UPLOAD_TIMEOUT = 150
    MAX_RETRIES = 3
    RETRY_DELAY = 2  # Base delay for exponential backoff
    MAX_POLL_ATTEMPTS = 60
    SYNTHESIS_TIMEOUT = 60

    # File size limits
    MAX_FILE_SIZE = 25 * 1024 * 1024  # 25MB (AssemblyAI limit)

    UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
    ALLOWED_EXTENSIONS = {".wav", ".mp3"}

    # Speaking rate shared by the filler and timing estimators
    WORDS_PER_MINUTE = 150

    # Tone scoring
    SCORE_MIN = 1
    SCORE_MAX = 10
    FORMALITY_BASE = 5
    POLITENESS_BASE = 3
    POLITENESS_WEIGHT = 2
    CLARITY_SENTENCE_KNEE = 15
    CLARITY_SENTENCE_DIVISOR = 3
    FILLER_PHRASE_ISSUE_THRESHOLD = 2

    # Script timing
    SCRIPT_MIN_WORDS = 100
    SCRIPT_MAX_WORDS = 1000
    TARGET_SHORT_RATIO = 0.8
    TARGET_LONG_RATIO = 1.2
    LONG_SENTENCE_WORDS = 20
    SLOW_WPM_THRESHOLD = 120
    FAST_WPM_THRESHOLD = 180
    DEFAULT_TARGET_SECONDS = 300

    # Timers
    TICK_INTERVAL_SECONDS = 1.0
    PREPARATION_SECONDS = 30
    SPEECH_SECONDS = 120

    # Word lists (lowercase, matched as substrings)
    FILLER_WORDS = ("um", "uh", "like", "you know", "so", "actually", "basically", "literally")
    FORMAL_WORDS = ("please", "thank you", "kindly", "appreciate", "sincerely", "regards", "would", "could")
    CASUAL_WORDS = ("hey", "hi", "thanks", "yeah", "ok", "cool", "awesome", "btw", "fyi")
    POLITENESS_PHRASES = ("please", "thank you", "would you", "could you", "appreciate")
    TONE_FILLER_PHRASES = ("i think", "i guess", "maybe", "sort of", "kind of", "probably")
    WEAK_PHRASES = ("sorry to bother", "just wondering", "i was thinking", "if you don't mind")
    DEMANDING_WORDS = ("asap", "urgent")
    GREETING_WORDS = ("hi", "hello", "dear")
    CLOSING_WORDS = ("sincerely", "regards", "thank you", "thanks")
