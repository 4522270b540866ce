"""
Hosted language-model verification with local fallback.

Sends the verse words and the user's input to a Gemini ``generateContent``
endpoint and asks for the ids of the words recited from the beginning of the
verse. The answer is untrusted: it must parse, carry a confidence in [0, 1]
and list exactly the first k word ids in order. Anything else (transport
error, HTTP error, timeout, bad JSON, non-prefix ids) falls back to the
local matcher on the same input.
"""

import asyncio
import json

import httpx
from pydantic import BaseModel, Field, ValidationError

from tasmee._logging import (
    log_remote_fallback,
    log_verification_complete,
    log_verification_start,
)
from tasmee.config import TasmeeSettings, get_settings
from tasmee.exceptions import ConfigurationError, RemoteVerificationError
from tasmee.models import MatchResult, Verse
from tasmee.verification.base import BaseVerifier
from tasmee.verification.local import LocalVerifier


PROMPT_TEMPLATE = """You are an expert Quranic recitation verifier.

Target Verse: "{verse_text}"
Target Words List: {words_json}

User Input: "{user_input}"

Task: Determine which words from the **beginning** of the target verse have been correctly recited/typed in the User Input.

Rules:
1. The matching must start from the first word of the verse.
2. The order must be sequential. If word 1 is matched, check word 2. If word 2 is missing or wrong, stop matching.
3. Be flexible with diacritics (Tashkeel). "اياك" should match "إِيَّاكَ".
4. Be flexible with common orthographic variations (e.g., Alif Hamza vs Alif, Taa Marbuta vs Haa).
5. Be flexible with speech-to-text anomalies (e.g. slight misspellings that sound similar).
6. Count a word as matched only if you are at least {threshold_percent}% confident it was recited.
7. Return the list of IDs of the words that are considered "recited correctly".

Output JSON Schema:
{{
  "matchedWordIds": [number],
  "confidence": number (0-1)
}}
"""

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "matchedWordIds": {"type": "ARRAY", "items": {"type": "INTEGER"}},
        "confidence": {"type": "NUMBER"},
    },
    "required": ["matchedWordIds", "confidence"],
}


class RemoteVerdict(BaseModel):
    """Shape of the JSON object the model must answer with."""

    matched_word_ids: list[int] = Field(..., alias="matchedWordIds")
    confidence: float = Field(..., ge=0.0, le=1.0)

    model_config = {"populate_by_name": True}


def build_prompt(verse: Verse, user_input: str, accept_threshold: float) -> str:
    """Render the verification instructions for one verse and input."""
    words = [{"id": w.id, "text": w.text, "clean": w.clean_text} for w in verse.words]
    return PROMPT_TEMPLATE.format(
        verse_text=verse.text,
        words_json=json.dumps(words, ensure_ascii=False),
        user_input=user_input,
        threshold_percent=round(accept_threshold * 100),
    )


def build_request_body(verse: Verse, user_input: str, accept_threshold: float) -> dict:
    """Build the generateContent request body."""
    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": build_prompt(verse, user_input, accept_threshold)}],
            }
        ],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def parse_response(verse: Verse, payload: dict) -> MatchResult:
    """
    Validate a generateContent response and turn it into a MatchResult.

    Args:
        verse: Verse the request was made for
        payload: Decoded JSON body of the HTTP response

    Returns:
        MatchResult with a prefix of the verse's word ids

    Raises:
        RemoteVerificationError: If the response is malformed or the ids are
            not the verse's leading word ids in order
    """
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise RemoteVerificationError("Response has no candidate text")

    if not isinstance(text, str):
        raise RemoteVerificationError("Candidate text is not a string")

    try:
        verdict = RemoteVerdict.model_validate_json(text)
    except ValidationError as e:
        raise RemoteVerificationError(f"Malformed verdict: {e.error_count()} validation errors")

    ids = verdict.matched_word_ids
    if ids != verse.word_ids[: len(ids)]:
        raise RemoteVerificationError(
            "Matched ids are not a prefix of the verse",
            context={"verse_key": verse.key, "ids": ids},
        )

    return MatchResult(matched_word_ids=ids, confidence=verdict.confidence)


class RemoteVerifier(BaseVerifier):
    """
    Verifier backed by a hosted language model.

    At most one remote attempt is made per call; on any failure the result
    of the fallback verifier on the same input is returned instead.

    Example:
        async with RemoteVerifier(api_key="...") as verifier:
            result = await verifier.verify(verse, "بسم الله الرحمن")

    Or using environment variables:
        export TASMEE_GEMINI_API_KEY="..."

        verifier = RemoteVerifier()
    """

    name = "remote"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        fallback: BaseVerifier | None = None,
        settings: TasmeeSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the remote verifier.

        Args:
            api_key: API key for the hosted model (overrides settings)
            model: Model name (overrides settings)
            fallback: Verifier used when the remote call fails
                (default: LocalVerifier with settings.local_accept_threshold)
            settings: Settings instance to use
            transport: Custom httpx transport, mainly for tests
        """
        self._settings = settings or get_settings()

        self._api_key = api_key or self._settings.gemini_api_key
        self._model = model or self._settings.gemini_model
        self._timeout = self._settings.remote_timeout_seconds
        self._accept_threshold = self._settings.remote_accept_threshold

        if not self._api_key:
            raise ConfigurationError(
                "An API key is required for remote verification. "
                "Set via api_key parameter or TASMEE_GEMINI_API_KEY env var.",
                setting_name="gemini_api_key",
            )

        self._fallback = fallback or LocalVerifier(
            threshold=self._settings.local_accept_threshold
        )
        self._transport = transport

        # HTTP client (lazy initialization)
        self._client: httpx.AsyncClient | None = None
        self._closed = False

    @property
    def is_available(self) -> bool:
        """Whether remote calls may be attempted (False once closed)."""
        return not self._closed

    @property
    def fallback(self) -> BaseVerifier:
        return self._fallback

    @property
    def endpoint_url(self) -> str:
        base = self._settings.gemini_base_url.rstrip("/")
        return f"{base}/models/{self._model}:generateContent"

    def load(self) -> None:
        """Create the HTTP client. Lightweight; called lazily on first verify."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout, connect=min(self._timeout, 3.0)),
            headers={"x-goog-api-key": self._api_key},
            transport=self._transport,
        )
        self._closed = False

    async def aclose(self) -> None:
        """Close the HTTP client and stop attempting remote calls."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._closed = True
        await self._fallback.aclose()

    async def verify(self, verse: Verse, raw_input: str) -> MatchResult:
        if not raw_input or not raw_input.strip():
            return MatchResult.empty()

        if not self.is_available:
            return await self._fallback.verify(verse, raw_input)

        log_verification_start(verse.key, self.name, len(raw_input.split()))

        try:
            result = await asyncio.wait_for(
                self._request(verse, raw_input), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            log_remote_fallback(verse.key, f"timed out after {self._timeout:.1f}s")
            return await self._fallback.verify(verse, raw_input)
        except (httpx.HTTPError, RemoteVerificationError) as e:
            log_remote_fallback(verse.key, str(e) or type(e).__name__)
            return await self._fallback.verify(verse, raw_input)

        log_verification_complete(
            verse.key, self.name, result.matched_count, verse.word_count, result.confidence
        )
        return result

    async def _request(self, verse: Verse, raw_input: str) -> MatchResult:
        """Perform one generateContent round trip and validate the answer."""
        if self._client is None:
            self.load()

        response = await self._client.post(
            self.endpoint_url,
            json=build_request_body(verse, raw_input, self._accept_threshold),
        )

        if response.status_code != 200:
            raise RemoteVerificationError(
                f"Verification API error: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError:
            raise RemoteVerificationError("Response body is not JSON")

        return parse_response(verse, payload)
