import math
from typing import Optional

from config import Config
from models import PacingFeedback, PacingStatus, TimingAnalysis
from services.lexical import round_half_up, split_sentences, tokenize


def format_clock(seconds: int) -> str:
    """Render seconds as m:ss."""
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def format_duration(seconds: int) -> str:
    """Render seconds as 45s, 2m or 2m 5s."""
    if seconds < 60:
        return f"{seconds}s"
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}m {secs}s" if secs > 0 else f"{minutes}m"


class SpeechTimingEstimator:
    def __init__(self, words_per_minute: int = Config.WORDS_PER_MINUTE):
        self.words_per_minute = words_per_minute
        self.slow_threshold = Config.SLOW_WPM_THRESHOLD
        self.fast_threshold = Config.FAST_WPM_THRESHOLD

    def estimate_seconds(self, word_count: int) -> int:
        return math.ceil(word_count * 60 / self.words_per_minute)

    def analyze(self, script: str, target_seconds: int) -> Optional[TimingAnalysis]:
        """Estimate how long a prepared script takes to deliver."""
        words = tokenize(script)
        if not words:
            return None

        word_count = len(words)
        estimated = self.estimate_seconds(word_count)
        recommendations = []

        if word_count < Config.SCRIPT_MIN_WORDS:
            recommendations.append("Consider adding more content - your speech might be too short")
        elif word_count > Config.SCRIPT_MAX_WORDS:
            recommendations.append("Your speech might be too long - consider condensing key points")

        if estimated < target_seconds * Config.TARGET_SHORT_RATIO:
            recommendations.append("Speech may be shorter than your target time - add examples or details")
        elif estimated > target_seconds * Config.TARGET_LONG_RATIO:
            recommendations.append("Speech may be longer than your target time - consider removing less critical points")

        sentence_count = len(split_sentences(script)) or 1
        if word_count / sentence_count > Config.LONG_SENTENCE_WORDS:
            recommendations.append("Consider shorter sentences for better clarity and pacing")

        if not recommendations:
            recommendations.append("Great! Your speech length looks well-balanced for your target time")

        return TimingAnalysis(
            word_count=word_count,
            estimated_time_seconds=estimated,
            words_per_minute=round_half_up(word_count * 60 / estimated),
            recommendations=recommendations,
        )

    def live_pacing(self, analysis: Optional[TimingAnalysis], elapsed_seconds: int) -> Optional[PacingFeedback]:
        """Pacing feedback while the speaker is timed against the script.

        The words expected by now are pro-rated from the estimate, so the
        rate reported is the script's nominal rate for any elapsed time.
        """
        if analysis is None or elapsed_seconds == 0:
            return None

        estimated = analysis.estimated_time_seconds
        expected_words = analysis.word_count * elapsed_seconds / estimated
        current_wpm = round_half_up(expected_words / (elapsed_seconds / 60))

        if current_wpm < self.slow_threshold:
            feedback = "Speaking slower than recommended"
        elif current_wpm > self.fast_threshold:
            feedback = "Speaking faster than recommended"
        else:
            feedback = "Good speaking pace"

        progress = elapsed_seconds / estimated
        if progress < Config.TARGET_SHORT_RATIO:
            status = PacingStatus.ON_TRACK
        elif progress < Config.TARGET_LONG_RATIO:
            status = PacingStatus.NEAR_TARGET
        else:
            status = PacingStatus.OVER_TIME

        return PacingFeedback(
            current_wpm=current_wpm,
            feedback=feedback,
            status=status,
            elapsed=format_clock(elapsed_seconds),
            estimated=format_duration(estimated),
        )
