import pytest

from models import PacingStatus
from services.timing import SpeechTimingEstimator, format_clock, format_duration

TEN_WORD_SENTENCE = "one two three four five six seven eight nine ten. "


@pytest.fixture
def estimator():
    return SpeechTimingEstimator()


def test_format_clock():
    assert format_clock(0) == "0:00"
    assert format_clock(65) == "1:05"
    assert format_clock(600) == "10:00"


def test_format_duration():
    assert format_duration(45) == "45s"
    assert format_duration(120) == "2m"
    assert format_duration(125) == "2m 5s"


def test_estimate_seconds(estimator):
    assert estimator.estimate_seconds(150) == 60
    assert estimator.estimate_seconds(7) == 3
    assert estimator.estimate_seconds(0) == 0


def test_blank_script(estimator):
    assert estimator.analyze("", 300) is None
    assert estimator.analyze("  ", 300) is None


def test_short_script(estimator):
    result = estimator.analyze("Hello everyone. Thanks for coming.", 300)

    assert result.word_count == 5
    assert result.estimated_time_seconds == 2
    assert result.words_per_minute == 150
    assert result.recommendations == [
        "Consider adding more content - your speech might be too short",
        "Speech may be shorter than your target time - add examples or details",
    ]


def test_balanced_script(estimator):
    result = estimator.analyze(TEN_WORD_SENTENCE * 15, 60)

    assert result.word_count == 150
    assert result.estimated_time_seconds == 60
    assert result.recommendations == ["Great! Your speech length looks well-balanced for your target time"]


def test_long_sentences(estimator):
    result = estimator.analyze(" ".join(["word"] * 150), 60)
    assert result.recommendations == ["Consider shorter sentences for better clarity and pacing"]


def test_long_script(estimator):
    result = estimator.analyze(" ".join(["word"] * 1100), 300)

    assert result.recommendations[:2] == [
        "Your speech might be too long - consider condensing key points",
        "Speech may be longer than your target time - consider removing less critical points",
    ]


def test_live_pacing_needs_elapsed_time(estimator):
    analysis = estimator.analyze(TEN_WORD_SENTENCE * 15, 60)

    assert estimator.live_pacing(analysis, 0) is None
    assert estimator.live_pacing(None, 30) is None


def test_live_pacing_progress(estimator):
    analysis = estimator.analyze(TEN_WORD_SENTENCE * 15, 60)

    halfway = estimator.live_pacing(analysis, 30)
    assert halfway.current_wpm == 150
    assert halfway.feedback == "Good speaking pace"
    assert halfway.status == PacingStatus.ON_TRACK
    assert halfway.elapsed == "0:30"
    assert halfway.estimated == "1m"

    assert estimator.live_pacing(analysis, 60).status == PacingStatus.NEAR_TARGET
    assert estimator.live_pacing(analysis, 90).status == PacingStatus.OVER_TIME


def test_live_pacing_rate_feedback():
    script = TEN_WORD_SENTENCE * 15

    slow = SpeechTimingEstimator(words_per_minute=100)
    assert slow.live_pacing(slow.analyze(script, 60), 30).feedback == "Speaking slower than recommended"

    fast = SpeechTimingEstimator(words_per_minute=200)
    assert fast.live_pacing(fast.analyze(script, 60), 30).feedback == "Speaking faster than recommended"
