import math
from typing import Optional

from config import Config
from models import FillerResult
from services.lexical import WordList, round_half_up, tokenize, tokens_matching


class FillerAnalyzer:
    def __init__(self, fillers: Optional[WordList] = None, words_per_minute: int = Config.WORDS_PER_MINUTE):
        self.fillers = fillers if fillers is not None else WordList(Config.FILLER_WORDS, name="fillers")
        self.words_per_minute = words_per_minute

    def analyze(self, text: str) -> Optional[FillerResult]:
        """Count filler words in a spoken or typed response.

        Returns None for blank text. Each token containing a filler counts
        once, so repeated fillers raise ``filler_count`` while
        ``filler_words`` lists each distinct token once.
        """
        words = [word.lower() for word in tokenize(text)]
        if not words:
            return None

        detected = tokens_matching(words, self.fillers)
        word_count = len(words)
        filler_count = len(detected)

        return FillerResult(
            word_count=word_count,
            filler_count=filler_count,
            filler_words=list(dict.fromkeys(detected)),
            estimated_time_seconds=math.ceil(word_count * 60 / self.words_per_minute),
            clarity_percent=round_half_up((1 - filler_count / word_count) * 100),
        )
