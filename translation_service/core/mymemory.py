import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from translation_service.config import MYMEMORY_URL
from translation_service.core.errors import (
    DecodingError,
    RequestConstructionError,
    UpstreamTransportError,
)
from translation_service.core.translator import Translator

logger = logging.getLogger(__name__)


class _ResponseData(BaseModel):
    translated_text: str = Field(alias="translatedText")


class MyMemoryResponse(BaseModel):
    """
    Only the translated text is read; matches, quota and status fields
    returned alongside it are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    response_data: _ResponseData = Field(alias="responseData")


class MyMemoryTranslator(Translator):
    def __init__(self, base_url: str = MYMEMORY_URL, timeout: float | None = None):
        self.base_url = base_url
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=timeout)

    def _build_request(
        self, text: str, source_lang: str, target_lang: str, timeout: float | None
    ) -> httpx.Request:
        params = {"q": text, "langpair": f"{source_lang}|{target_lang}"}
        if self.timeout is not None and timeout is not None:
            timeout = min(self.timeout, timeout)

        try:
            if timeout is None:
                return self.client.build_request("GET", self.base_url, params=params)
            return self.client.build_request("GET", self.base_url, params=params, timeout=timeout)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestConstructionError(f"failed to build request: {e}") from e

    async def translate(
        self, text: str, source_lang: str, target_lang: str, timeout: float | None = None
    ) -> str:
        """
        Translates text with a single GET against the MyMemory API.
        The HTTP status is not checked: MyMemory reports its own errors
        inside a JSON body that still carries responseData.translatedText.
        """
        request = self._build_request(text, source_lang, target_lang, timeout)
        logger.debug("MyMemory request: %s", request.url)

        try:
            resp = await self.client.send(request)
        except httpx.UnsupportedProtocol as e:
            raise RequestConstructionError(f"failed to build request: {e}") from e
        except httpx.HTTPError as e:
            raise UpstreamTransportError(f"request failed: {e}") from e

        try:
            data = MyMemoryResponse.model_validate_json(resp.content)
        except ValidationError as e:
            raise DecodingError(
                f"failed to decode response (status {resp.status_code}): "
                f"{e.errors()[0]['msg']}"
            ) from e

        logger.debug("MyMemory response for %s|%s: %r", source_lang, target_lang, data)
        return data.response_data.translated_text

    async def close(self) -> None:
        await self.client.aclose()
