from dataclasses import dataclass, field
from typing import Optional

from config import Config
from models import ToneCategory, ToneResult
from services.lexical import WordList, clamp, phrases_in_text, split_sentences, tokenize


def _words(name: str) -> WordList:
    return WordList(getattr(Config, name), name=name.lower())


@dataclass(frozen=True)
class ToneLexicon:
    formal: WordList = field(default_factory=lambda: _words("FORMAL_WORDS"))
    casual: WordList = field(default_factory=lambda: _words("CASUAL_WORDS"))
    politeness: WordList = field(default_factory=lambda: _words("POLITENESS_PHRASES"))
    fillers: WordList = field(default_factory=lambda: _words("TONE_FILLER_PHRASES"))
    weak: WordList = field(default_factory=lambda: _words("WEAK_PHRASES"))
    demanding: WordList = field(default_factory=lambda: _words("DEMANDING_WORDS"))
    greetings: WordList = field(default_factory=lambda: _words("GREETING_WORDS"))
    closings: WordList = field(default_factory=lambda: _words("CLOSING_WORDS"))


class ToneAnalyzer:
    """Heuristic formality, politeness and clarity scoring for emails.

    Every hit count is whole-text substring containment against the
    lexicon, so each entry counts at most once however often it appears.
    """

    def __init__(self, lexicon: Optional[ToneLexicon] = None):
        self.lexicon = lexicon or ToneLexicon()
        self.low = Config.SCORE_MIN
        self.high = Config.SCORE_MAX

    def analyze(self, text: str) -> Optional[ToneResult]:
        if not text.strip():
            return None

        lex = self.lexicon
        formal_hits = len(phrases_in_text(text, lex.formal))
        casual_hits = len(phrases_in_text(text, lex.casual))
        politeness_hits = len(phrases_in_text(text, lex.politeness))

        formality = clamp(Config.FORMALITY_BASE + formal_hits - casual_hits, self.low, self.high)
        politeness = clamp(Config.POLITENESS_BASE + Config.POLITENESS_WEIGHT * politeness_hits, self.low, self.high)
        clarity = self._clarity(text)

        issues = []
        suggestions = []

        if casual_hits > 0 and formal_hits == 0:
            issues.append("Too casual for professional communication")
            suggestions.append('Consider using "Hello" instead of "Hi" or "Hey"')
            suggestions.append('Add "please" and "thank you" for politeness')

        if formality > 8 and casual_hits == 0:
            issues.append("May be overly formal")
            suggestions.append("Consider a slightly warmer tone")

        if phrases_in_text(text, lex.demanding):
            issues.append("Contains potentially demanding language")
            suggestions.append('Consider "at your earliest convenience" instead of "ASAP"')

        if phrases_in_text(text, lex.weak):
            issues.append("Contains weak or apologetic language")
            suggestions.append("Be more direct and confident in your communication")

        if len(phrases_in_text(text, lex.fillers)) >= Config.FILLER_PHRASE_ISSUE_THRESHOLD:
            issues.append("Contains unnecessary filler phrases")
            suggestions.append('Remove uncertain language like "I think" or "maybe"')

        if not phrases_in_text(text, lex.greetings):
            issues.append("Missing proper greeting")
            suggestions.append('Add a greeting like "Hello [Name]" or "Dear [Name]"')

        if not phrases_in_text(text, lex.closings):
            issues.append("Missing polite closing")
            suggestions.append('Add a closing like "Best regards" or "Thank you"')

        return ToneResult(
            overall=self.classify(formality, politeness, len(issues)),
            formality=formality,
            politeness=politeness,
            clarity=clarity,
            issues=issues,
            suggestions=suggestions,
        )

    def classify(self, formality: int, politeness: int, issue_count: int) -> ToneCategory:
        if formality < 4 and politeness < 5:
            return ToneCategory.TOO_CASUAL
        if formality > 8 and politeness > 8:
            return ToneCategory.TOO_FORMAL
        if issue_count == 0:
            return ToneCategory.PERFECT
        return ToneCategory.UNCLEAR

    def _clarity(self, text: str) -> float:
        # Text without any sentence fragment counts as one sentence
        sentence_count = len(split_sentences(text)) or 1
        average_length = len(tokenize(text)) / sentence_count
        penalty = max(0, (average_length - Config.CLARITY_SENTENCE_KNEE) / Config.CLARITY_SENTENCE_DIVISOR)
        return float(clamp(self.high - penalty, self.low, self.high))
