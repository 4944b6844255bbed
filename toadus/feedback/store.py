"""Client for the published assignment artifacts: wheat, grader and hint table."""

from __future__ import annotations

import json
import logging
import typing as t
from abc import abstractmethod

import httpx
import pydantic as p

from toadus.forge import assignment_name, strip_comments
from toadus.model import HintTable

from .errors import ArtifactNotEnabledError, ArtifactTransportError
from .reporter import FeedbackEventLog

logger = logging.getLogger(__name__)


class Decryptor(t.Protocol):
    """Turns a downloaded artifact body into plain text."""

    @abstractmethod
    def decrypt(self, text: str) -> str: ...


class PlainTextDecryptor(object):
    def decrypt(self, text: str) -> str:
        return text


class ArtifactStore(object):
    """Fetches `{url}/{name}.wheat`, `.grader` and `.grader.json`.

    `name` is the test file's base name without `.test.frg`. Every call goes
    to the network; nothing is cached between requests.
    """

    WheatSuffix: t.Final[str] = ".wheat"
    GraderSuffix: t.Final[str] = ".grader"
    HintTableSuffix: t.Final[str] = ".grader.json"

    def __init__(
        self,
        url: str | p.HttpUrl,
        timeout: float = 30.0,
        decryptor: Decryptor | None = None,
        events: FeedbackEventLog | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = str(url).rstrip("/")
        self.timeout = timeout
        self.decryptor = decryptor or PlainTextDecryptor()
        self.events = events or FeedbackEventLog()
        self._transport = transport

    def artifact_url(self, test_file_name: str, suffix: str) -> str:
        return f"{self.url}/{assignment_name(test_file_name)}{suffix}"

    async def fetch_wheat(self, test_file_name: str) -> str:
        """The reference model, with comments removed."""
        return strip_comments(await self.download(self.artifact_url(test_file_name, self.WheatSuffix)))

    async def fetch_grader(self, test_file_name: str) -> str:
        grader = await self.download(self.artifact_url(test_file_name, self.GraderSuffix))
        # a mutant only needs to be checked, not proven
        return grader.replace("is theorem", "is checked")

    async def fetch_hint_table(self, test_file_name: str) -> HintTable:
        text = await self.download(self.artifact_url(test_file_name, self.HintTableSuffix))
        try:
            return HintTable.model_validate_json(text)
        except p.ValidationError as e:
            logger.warning(
                "could not parse hint table, treating it as empty",
                extra={"test_file_name": test_file_name, "errors": json.loads(e.json())},
            )
            return HintTable()

    async def download(self, url: str) -> str:
        logger.debug("downloading artifact", extra={"url": url})
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(url)
        except httpx.HTTPError as e:
            self.events.file_download(url)
            raise ArtifactTransportError(f"Toadus : Network error {e}", url=url) from e

        if resp.is_success:
            return self.decryptor.decrypt(resp.text)

        self.events.file_download(url, status_code=resp.status_code)
        if resp.status_code == httpx.codes.NOT_FOUND:
            raise ArtifactNotEnabledError(f"no artifact at {url}", url=url)
        raise ArtifactTransportError(
            f"Toadus : Network error {resp.status_code} {resp.reason_phrase}", url=url, status_code=resp.status_code
        )
