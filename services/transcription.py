import asyncio
import httpx
import logging
import os
from typing import Dict, Optional
from config import Config


class TranscriptionError(Exception):
    pass


class AssemblyAITranscriber:
    """Transcriber backed by the AssemblyAI upload/transcript API."""

    def __init__(self, api_key: Optional[str] = Config.ASSEMBLYAI_API_KEY,
                 base_url: str = "https://api.assemblyai.com/v2",
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 poll_interval: float = 1.0):
        self.api_key = api_key
        self.base_url = base_url
        self.transport = transport
        self.poll_interval = poll_interval
        self.max_retries = Config.MAX_RETRIES
        self.audio_mime_types = {
            ".mp3": "audio/mpeg",
            ".wav": "audio/wav",
        }

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def _client(self, timeout) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self.transport, follow_redirects=True)

    async def transcribe(self, file_path: str, mime_type: str) -> Optional[str]:
        """Upload, transcribe and return the text; None on any failure."""
        if not self.available:
            logging.warning("Transcription requested but no AssemblyAI API key is configured")
            return None

        try:
            upload_url = await self.upload_file_with_retry(file_path, mime_type)
            result = await self.submit_and_poll(upload_url)
        except (TranscriptionError, httpx.HTTPError, ValueError) as e:
            logging.error(f"Transcription failed for {file_path}: {e}")
            return None

        text = (result.get("text") or "").strip()
        return text or None

    async def upload_file_with_retry(self, file_path: str, mime_type: str) -> str:
        """Upload file with retry logic for network errors"""
        for attempt in range(self.max_retries):
            try:
                return await self.upload_file(file_path, mime_type)
            except httpx.TransportError as e:
                if attempt == self.max_retries - 1:
                    raise TranscriptionError(f"File upload failed after {self.max_retries} attempts: {e}")

                wait_time = Config.RETRY_DELAY ** attempt
                logging.warning(f"Upload attempt {attempt + 1} failed, retrying in {wait_time}s...")
                await asyncio.sleep(wait_time)

    async def upload_file(self, file_path: str, mime_type: str) -> str:
        if not os.path.exists(file_path):
            raise TranscriptionError(f"File not found: {file_path}")

        extension = os.path.splitext(file_path)[1].lower()
        effective_mime_type = self.audio_mime_types.get(extension, mime_type)
        logging.info(f"Uploading file: {file_path} ({os.path.getsize(file_path)} bytes)")

        timeout = httpx.Timeout(connect=30.0, read=Config.UPLOAD_TIMEOUT, write=Config.UPLOAD_TIMEOUT, pool=300.0)
        async with self._client(timeout) as client:
            with open(file_path, "rb") as f:
                response = await client.post(
                    f"{self.base_url}/upload",
                    files={"file": (os.path.basename(file_path), f, effective_mime_type)},
                    headers={"authorization": self.api_key},
                )

        if response.status_code == 401:
            raise TranscriptionError("Invalid AssemblyAI API key")
        elif response.status_code == 413:
            raise TranscriptionError("File too large for AssemblyAI")
        elif response.status_code not in (200, 201):
            raise TranscriptionError(f"Upload failed: {response.status_code} - {response.text}")

        upload_url = response.json().get("upload_url")
        if not upload_url:
            raise TranscriptionError("No upload URL returned from AssemblyAI")
        return upload_url

    async def submit_and_poll(self, audio_url: str) -> Dict:
        headers = {"authorization": self.api_key, "content-type": "application/json"}

        async with self._client(30.0) as client:
            response = await client.post(f"{self.base_url}/transcript", headers=headers, json={"audio_url": audio_url})
            if response.status_code != 200:
                raise TranscriptionError(f"Failed to submit transcription job: {response.status_code} - {response.text}")

            transcript_id = response.json().get("id")
            if not transcript_id:
                raise TranscriptionError("Failed to get transcript ID from submission response.")
            logging.info(f"Transcription job submitted. Transcript ID: {transcript_id}")

            for _ in range(Config.MAX_POLL_ATTEMPTS):
                response = await client.get(f"{self.base_url}/transcript/{transcript_id}", headers=headers)
                if response.status_code != 200:
                    raise TranscriptionError(f"Polling failed: {response.status_code} - {response.text}")

                result = response.json()
                status = result.get("status")
                if status == "completed":
                    return result
                elif status == "error":
                    raise TranscriptionError(f"Transcription failed: {result.get('error', 'Unknown transcription error')}")
                elif status in ("queued", "processing"):
                    await asyncio.sleep(self.poll_interval)
                else:
                    raise TranscriptionError(f"Unknown status: {status}")

        raise TranscriptionError("Transcription timeout - process took too long")
