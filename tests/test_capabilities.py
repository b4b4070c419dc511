import asyncio

import httpx

from services.synthesis import ElevenLabsSynthesizer
from services.transcription import AssemblyAITranscriber


def assemblyai_handler(final_status="completed", text="The quick brown fox"):
    polls = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["authorization"] == "test-key"
        if request.url.path == "/v2/upload":
            return httpx.Response(200, json={"upload_url": "https://cdn.example/audio"})
        if request.url.path == "/v2/transcript" and request.method == "POST":
            return httpx.Response(200, json={"id": "t-1"})
        if request.url.path == "/v2/transcript/t-1":
            polls.append(1)
            if len(polls) == 1:
                return httpx.Response(200, json={"status": "processing"})
            if final_status == "error":
                return httpx.Response(200, json={"status": "error", "error": "no speech"})
            return httpx.Response(200, json={"status": "completed", "text": text})
        return httpx.Response(404)

    return handler


def make_transcriber(handler, api_key="test-key"):
    return AssemblyAITranscriber(api_key=api_key, transport=httpx.MockTransport(handler), poll_interval=0)


def test_transcribes_uploaded_audio(tmp_path):
    audio = tmp_path / "attempt.wav"
    audio.write_bytes(b"RIFF0000WAVE")
    transcriber = make_transcriber(assemblyai_handler())

    assert transcriber.available
    assert asyncio.run(transcriber.transcribe(str(audio), "audio/wav")) == "The quick brown fox"


def test_provider_error_yields_no_transcript(tmp_path):
    audio = tmp_path / "attempt.wav"
    audio.write_bytes(b"RIFF0000WAVE")
    transcriber = make_transcriber(assemblyai_handler(final_status="error"))

    assert asyncio.run(transcriber.transcribe(str(audio), "audio/wav")) is None


def test_empty_transcript_yields_none(tmp_path):
    audio = tmp_path / "attempt.wav"
    audio.write_bytes(b"RIFF0000WAVE")
    transcriber = make_transcriber(assemblyai_handler(text="  "))

    assert asyncio.run(transcriber.transcribe(str(audio), "audio/wav")) is None


def test_rejected_upload_yields_none(tmp_path):
    audio = tmp_path / "attempt.wav"
    audio.write_bytes(b"RIFF0000WAVE")
    transcriber = make_transcriber(lambda request: httpx.Response(401))

    assert asyncio.run(transcriber.transcribe(str(audio), "audio/wav")) is None


def test_non_json_upload_reply_yields_none(tmp_path):
    audio = tmp_path / "attempt.wav"
    audio.write_bytes(b"RIFF0000WAVE")
    transcriber = make_transcriber(lambda request: httpx.Response(200, text="<html>Bad gateway</html>"))

    assert asyncio.run(transcriber.transcribe(str(audio), "audio/wav")) is None


def test_non_json_poll_reply_yields_none(tmp_path):
    audio = tmp_path / "attempt.wav"
    audio.write_bytes(b"RIFF0000WAVE")
    provider = assemblyai_handler()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v2/transcript/t-1":
            return httpx.Response(200, text="not json")
        return provider(request)

    assert asyncio.run(make_transcriber(handler).transcribe(str(audio), "audio/wav")) is None


def test_missing_file_yields_none(tmp_path):
    transcriber = make_transcriber(assemblyai_handler())
    assert asyncio.run(transcriber.transcribe(str(tmp_path / "missing.wav"), "audio/wav")) is None


def test_transcriber_without_key_is_unavailable(tmp_path):
    transcriber = AssemblyAITranscriber(api_key=None)

    assert not transcriber.available
    assert asyncio.run(transcriber.transcribe(str(tmp_path / "a.wav"), "audio/wav")) is None


def test_synthesizes_sentence():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["xi-api-key"] == "tts-key"
        assert request.url.path.endswith("/stream")
        return httpx.Response(200, content=b"ID3audio")

    synthesizer = ElevenLabsSynthesizer(api_key="tts-key", transport=httpx.MockTransport(handler))

    assert asyncio.run(synthesizer.synthesize("She sells seashells")) == b"ID3audio"


def test_synthesis_failure_yields_none():
    synthesizer = ElevenLabsSynthesizer(
        api_key="tts-key",
        transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")),
    )
    assert asyncio.run(synthesizer.synthesize("hello")) is None


def test_synthesizer_without_key_is_unavailable():
    synthesizer = ElevenLabsSynthesizer(api_key=None)

    assert not synthesizer.available
    assert asyncio.run(synthesizer.synthesize("hello")) is None
