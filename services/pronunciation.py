import logging
from typing import Optional

from models import AccuracyResult
from services.lexical import round_half_up, tokenize


def score_accuracy(spoken: str, target: str) -> Optional[int]:
    """Percentage of target words matched position by position.

    Words are compared exactly after lowercasing, index against index, with
    no realignment. The denominator is the target length, so extra trailing
    words in the transcript never lower the score. Returns None when either
    side has no words.
    """
    spoken_words = [w.lower() for w in tokenize(spoken)]
    target_words = [w.lower() for w in tokenize(target)]
    if not spoken_words or not target_words:
        return None

    matches = 0
    for i in range(max(len(spoken_words), len(target_words))):
        if i < len(spoken_words) and i < len(target_words) and spoken_words[i] == target_words[i]:
            matches += 1

    return round_half_up(matches / len(target_words) * 100)


class PronunciationSession:
    """Attempt counter and best score for one practice sentence."""

    def __init__(self, sentence: str):
        if not sentence.strip():
            raise ValueError("Practice sentence must not be empty")
        self.sentence = sentence
        self.reset()

    def reset(self):
        self.attempts = 0
        self.best_score = 0
        self.last_transcript: Optional[str] = None
        self.last_accuracy: Optional[int] = None

    def change_sentence(self, sentence: str):
        if not sentence.strip():
            raise ValueError("Practice sentence must not be empty")
        self.sentence = sentence
        self.reset()

    def score(self, transcript: Optional[str]) -> Optional[AccuracyResult]:
        """Score one attempt; a missing or blank transcript is not counted."""
        if transcript is None:
            return None

        accuracy = score_accuracy(transcript, self.sentence)
        if accuracy is None:
            logging.info("Empty transcript, attempt not scored")
            return None

        self.attempts += 1
        self.best_score = max(self.best_score, accuracy)
        self.last_transcript = transcript
        self.last_accuracy = accuracy

        return AccuracyResult(
            accuracy_percent=accuracy,
            attempt_number=self.attempts,
            best_score_so_far=self.best_score,
        )
