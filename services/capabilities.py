from typing import Optional, Protocol


class Transcriber(Protocol):
    """Turns recorded speech into text."""

    available: bool

    async def transcribe(self, file_path: str, mime_type: str) -> Optional[str]:
        """Return the transcript, or None when nothing could be recognised."""
        ...


class Synthesizer(Protocol):
    """Reads a sentence aloud. Callers never inspect the audio."""

    available: bool

    async def synthesize(self, text: str) -> Optional[bytes]:
        ...
