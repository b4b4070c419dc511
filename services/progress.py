import json
from typing import Dict, List, Optional, Protocol

STREAK_KEY = "challenge-streak"
COMPLETED_KEY = "completed-challenges"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class ChallengeProgress:
    """Daily challenge streak and completed dates, kept in a string store."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    @property
    def streak(self) -> int:
        return int(self.store.get(STREAK_KEY) or "0")

    @property
    def completed(self) -> List[str]:
        saved = self.store.get(COMPLETED_KEY)
        return json.loads(saved) if saved else []

    def is_completed(self, date: str) -> bool:
        return date in self.completed

    def complete(self, date: str, response: str) -> bool:
        """Record a completed challenge; blank responses and repeats are refused."""
        if not response.strip() or self.is_completed(date):
            return False

        self.store.set(COMPLETED_KEY, json.dumps(self.completed + [date]))
        self.store.set(STREAK_KEY, str(self.streak + 1))
        return True
