"""HTTP client for the SpeechAce scripted-reading endpoint."""
from __future__ import annotations

import logging
from typing import IO, Any, Dict, Optional, Union

import requests

from .. import config
from ..errors import ScoringServiceError

logger = logging.getLogger(__name__)

AudioInput = Union[str, bytes, IO[bytes]]

CONTENT_TYPE_EXTENSIONS = (
    (("audio/wav", "audio/x-wav"), "wav"),
    (("audio/mpeg", "audio/mp3"), "mp3"),
    (("audio/ogg", "application/ogg"), "ogg"),
    (("audio/webm",), "webm"),
    (("audio/mp4", "video/mp4"), "mp4"),
    (("audio/aac",), "aac"),
    (("audio/flac",), "flac"),
)


def extension_for(content_type: Optional[str]) -> str:
    """File extension for an audio content type ("bin" if unknown)."""
    ct = (content_type or "").lower()
    for types, ext in CONTENT_TYPE_EXTENSIONS:
        if any(t in ct for t in types):
            return ext
    return "bin"


class SpeechAceClient:
    """Forwards a recording and its reference text to SpeechAce.

    Args:
        api_key: SpeechAce API key
        endpoint: Text (scripted reading) endpoint URL
        timeout: Request timeout in seconds
        session: Optional requests session (tests inject a mock)
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        timeout: float = config.SPEECHACE_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, session: Optional[requests.Session] = None) -> "SpeechAceClient":
        """Client from SPEECHACE_KEY / SPEECHACE_TEXT_ENDPOINT.

        Raises:
            ConfigurationError: If either setting is missing
        """
        return cls(
            api_key=config.require("SPEECHACE_KEY"),
            endpoint=config.require("SPEECHACE_TEXT_ENDPOINT"),
            timeout=config.SPEECHACE_TIMEOUT,
            session=session,
        )

    def score_text(
        self,
        audio: AudioInput,
        text: str,
        dialect: Optional[str] = None,
        *,
        content_type: str = "application/octet-stream",
        filename: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Score a reading of ``text``.

        Args:
            audio: Path to an audio file, raw bytes, or a binary file object
            text: Reference text the speaker read
            dialect: "en-us" or "en-gb" (anything else uses the default)
            content_type: MIME type of the audio
            filename: Upload filename (default: speech.<ext>)

        Returns:
            Decoded JSON response; ``{"raw": body}`` if the body is not JSON

        Raises:
            ScoringServiceError: On connection failure or a 5xx response
        """
        dialect = config.resolve_dialect(dialect)
        filename = filename or f"speech.{extension_for(content_type)}"

        if isinstance(audio, str):
            with open(audio, "rb") as f:
                return self._post(f, text, dialect, filename, content_type)
        return self._post(audio, text, dialect, filename, content_type)

    def _post(self, audio: Any, text: str, dialect: str, filename: str, content_type: str) -> Dict[str, Any]:
        params = {"key": self.api_key, "dialect": dialect}
        data = {"text": text, "include_fluency": "1"}
        files = {"user_audio_file": (filename, audio, content_type)}

        try:
            response = self.session.post(
                self.endpoint, params=params, data=data, files=files, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error("SpeechAce request failed: %s", e)
            raise ScoringServiceError(f"Scoring service unreachable: {e}") from e

        if response.status_code >= 500:
            logger.error("SpeechAce returned %s: %s", response.status_code, response.text[:200])
            raise ScoringServiceError(
                f"Scoring service error {response.status_code}", status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError:
            logger.warning("SpeechAce returned a non-JSON body (status %s)", response.status_code)
            return {"raw": response.text}

        if not isinstance(body, dict):
            return {"raw": body}
        if body.get("status") == "error":
            logger.warning("SpeechAce reported an error: %s", body.get("short_message") or body.get("detail_message"))
        return body
