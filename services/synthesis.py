import httpx
import logging
from typing import Optional
from config import Config


class ElevenLabsSynthesizer:
    """Synthesizer backed by the ElevenLabs streaming text-to-speech API."""

    def __init__(self, api_key: Optional[str] = Config.ELEVENLABS_API_KEY,
                 voice_id: str = Config.ELEVENLABS_VOICE_ID,
                 model_id: str = Config.ELEVENLABS_MODEL_ID,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.voice_id = voice_id
        self.model_id = model_id
        self.transport = transport

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    async def synthesize(self, text: str) -> Optional[bytes]:
        if not self.available:
            logging.warning("Speech synthesis requested but no ElevenLabs API key is configured")
            return None

        url = f"https://api.elevenlabs.io/v1/text-to-speech/{self.voice_id}/stream"
        headers = {"xi-api-key": self.api_key, "Accept": "audio/mpeg", "Content-Type": "application/json"}
        # Slower, steady delivery for pronunciation examples
        payload = {
            "text": text,
            "model_id": self.model_id,
            "voice_settings": {"stability": 0.6, "similarity_boost": 0.8, "speed": 0.8},
        }

        try:
            async with httpx.AsyncClient(timeout=Config.SYNTHESIS_TIMEOUT, transport=self.transport) as client:
                response = await client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logging.error(f"Speech synthesis request failed: {e}")
            return None

        if response.status_code != 200:
            logging.error(f"ElevenLabs API Error: {response.status_code} - {response.text}")
            return None
        return response.content
