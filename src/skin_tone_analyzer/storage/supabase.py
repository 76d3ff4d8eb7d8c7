"""Supabase Storage gateway for original and processed images."""

import base64
import logging
from urllib.parse import quote

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from skin_tone_analyzer.config import (
    STORAGE_TIMEOUT,
    SUPABASE_ANON_KEY,
    SUPABASE_BUCKET,
    SUPABASE_URL,
)
from skin_tone_analyzer.models import Outcome

logger = logging.getLogger(__name__)


class SupabaseStorage:
    """Upload objects to a public Supabase Storage bucket.

    Uploads are best effort: ``upload`` returns the public URL or None and never
    raises for network or API errors.
    """

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        bucket: str | None = None,
        timeout: float = STORAGE_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = (url if url is not None else SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else SUPABASE_ANON_KEY
        self.bucket = bucket if bucket is not None else SUPABASE_BUCKET
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.url and self.api_key and self.bucket)

    def public_url(self, path: str) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{quote(path)}"

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, max=10),
        retry=retry_if_exception_type(httpx.TimeoutException),
        reraise=True,
    )
    def _put_object(self, data: bytes, path: str, content_type: str) -> None:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "apikey": self.api_key,
            "Content-Type": content_type,
            "x-upsert": "true",
        }
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            resp = client.post(
                f"{self.url}/storage/v1/object/{self.bucket}/{quote(path)}",
                content=data,
                headers=headers,
            )
            resp.raise_for_status()

    def store(self, data: bytes, path: str, content_type: str) -> Outcome[str]:
        """Upload and report how it went."""
        if not self.configured:
            return Outcome.degraded("object storage is not configured")
        try:
            self._put_object(data, path, content_type)
        except httpx.HTTPError as exc:
            logger.warning("Upload of %s failed: %s", path, exc)
            return Outcome.failed(f"upload failed: {exc}")
        return Outcome.ok(self.public_url(path))

    def upload(self, data: bytes, path: str, content_type: str) -> str | None:
        return self.store(data, path, content_type).value


def local_url(data: bytes, content_type: str) -> str:
    """An in-memory ``data:`` URL used when an upload yields no public URL."""
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"
