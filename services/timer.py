from typing import Optional

from config import Config
from models import ImpromptuSnapshot, SpeechPhase, StopwatchSnapshot, StopwatchState
from services.timing import format_clock


class Stopwatch:
    """Elapsed-time counter for conversation, speech and challenge practice.

    The limit is for display only: once elapsed reaches it ``time_up``
    flips, but the stopwatch keeps running until the host stops it.
    """

    commands = ("start", "pause", "reset", "restart")

    def __init__(self, limit_seconds: Optional[int] = None):
        if limit_seconds is not None and limit_seconds < 0:
            raise ValueError("limit_seconds must not be negative")
        self.limit_seconds = limit_seconds
        self.state = StopwatchState.IDLE
        self.elapsed = 0

    @property
    def is_running(self) -> bool:
        return self.state == StopwatchState.RUNNING

    @property
    def remaining_seconds(self) -> Optional[int]:
        if self.limit_seconds is None:
            return None
        return max(0, self.limit_seconds - self.elapsed)

    @property
    def time_up(self) -> bool:
        return self.limit_seconds is not None and self.elapsed >= self.limit_seconds

    def start(self) -> bool:
        if self.state == StopwatchState.RUNNING:
            return False
        self.state = StopwatchState.RUNNING
        return True

    def pause(self) -> bool:
        if self.state != StopwatchState.RUNNING:
            return False
        self.state = StopwatchState.PAUSED
        return True

    def reset(self) -> bool:
        self.state = StopwatchState.IDLE
        self.elapsed = 0
        return True

    def restart(self) -> bool:
        self.elapsed = 0
        self.state = StopwatchState.RUNNING
        return True

    def tick(self):
        if self.state == StopwatchState.RUNNING:
            self.elapsed += 1

    def snapshot(self) -> StopwatchSnapshot:
        remaining = self.remaining_seconds
        return StopwatchSnapshot(
            state=self.state,
            elapsed_seconds=self.elapsed,
            limit_seconds=self.limit_seconds,
            remaining_seconds=remaining,
            time_up=self.time_up,
            display=format_clock(remaining if remaining is not None else self.elapsed),
        )


class ImpromptuTimer:
    """Preparation then speaking, each with its own time budget.

    When preparation runs out the timer returns to READY rather than
    starting to speak; the speaker starts the speaking phase explicitly.
    """

    commands = ("select_topic", "set_durations", "start_preparation", "start_speaking", "pause", "reset")

    def __init__(self, preparation_seconds: int = Config.PREPARATION_SECONDS,
                 speech_seconds: int = Config.SPEECH_SECONDS):
        self._validate(preparation_seconds, speech_seconds)
        self.preparation_seconds = preparation_seconds
        self.speech_seconds = speech_seconds
        self.topic: Optional[str] = None
        self.phase = SpeechPhase.READY
        self.preparation_elapsed = 0
        self.speech_elapsed = 0

    @staticmethod
    def _validate(preparation_seconds: int, speech_seconds: int):
        if preparation_seconds <= 0 or speech_seconds <= 0:
            raise ValueError("Phase durations must be positive")

    @property
    def is_running(self) -> bool:
        return self.phase in (SpeechPhase.PREPARING, SpeechPhase.SPEAKING)

    def select_topic(self, topic: str) -> bool:
        self.topic = topic
        self.reset()
        return True

    def set_durations(self, preparation_seconds: Optional[int] = None,
                      speech_seconds: Optional[int] = None) -> bool:
        if self.phase != SpeechPhase.READY:
            return False

        preparation = self.preparation_seconds if preparation_seconds is None else preparation_seconds
        speech = self.speech_seconds if speech_seconds is None else speech_seconds
        self._validate(preparation, speech)
        self.preparation_seconds = preparation
        self.speech_seconds = speech
        return True

    def start_preparation(self) -> bool:
        if not self.topic or self.phase != SpeechPhase.READY:
            return False
        self.phase = SpeechPhase.PREPARING
        self.preparation_elapsed = 0
        return True

    def start_speaking(self) -> bool:
        if self.phase != SpeechPhase.READY:
            return False
        self.phase = SpeechPhase.SPEAKING
        self.speech_elapsed = 0
        return True

    def pause(self) -> bool:
        if self.phase != SpeechPhase.SPEAKING:
            return False
        self.phase = SpeechPhase.READY
        return True

    def reset(self) -> bool:
        self.phase = SpeechPhase.READY
        self.preparation_elapsed = 0
        self.speech_elapsed = 0
        return True

    def tick(self):
        if self.phase == SpeechPhase.PREPARING:
            self.preparation_elapsed += 1
        elif self.phase == SpeechPhase.SPEAKING:
            self.speech_elapsed += 1
        self._check_budget()

    def _check_budget(self):
        if self.phase == SpeechPhase.PREPARING and self.preparation_elapsed >= self.preparation_seconds:
            self.phase = SpeechPhase.READY
        elif self.phase == SpeechPhase.SPEAKING and self.speech_elapsed >= self.speech_seconds:
            self.phase = SpeechPhase.FINISHED

    def snapshot(self) -> ImpromptuSnapshot:
        if self.phase == SpeechPhase.PREPARING:
            remaining = self.preparation_seconds - self.preparation_elapsed
        else:
            remaining = self.speech_seconds - self.speech_elapsed
        return ImpromptuSnapshot(
            phase=self.phase,
            topic=self.topic,
            preparation_elapsed=self.preparation_elapsed,
            preparation_seconds=self.preparation_seconds,
            speech_elapsed=self.speech_elapsed,
            speech_seconds=self.speech_seconds,
            display=format_clock(max(0, remaining)),
        )
