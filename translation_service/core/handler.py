import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from translation_service.config import DEFAULT_SOURCE_LANG
from translation_service.core.errors import UpstreamError
from translation_service.core.translator import Translator

logger = logging.getLogger(__name__)

ERROR_TEMPLATE = "[translation error: {}]"


@dataclass(frozen=True)
class TranslationRequest:
    source_text: str
    source_lang: str = ""
    target_langs: tuple[str, ...] = ()


@dataclass
class TranslationResponse:
    translations: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Translated:
    text: str


@dataclass(frozen=True)
class Failed:
    reason: str


SlotResult = Translated | Failed


def render(result: SlotResult) -> str:
    if isinstance(result, Failed):
        return ERROR_TEMPLATE.format(result.reason)
    return result.text


class TranslationHandler:
    def __init__(
        self,
        translator: Translator,
        default_source_lang: str = DEFAULT_SOURCE_LANG,
        concurrency_limit: int = 20,
    ):
        if concurrency_limit < 1:
            raise ValueError(f"concurrency_limit must be positive, got {concurrency_limit}")
        self.translator = translator
        self.default_source_lang = default_source_lang
        self.concurrency_limit = concurrency_limit

    def resolve_source_lang(self, source_lang: str | None) -> str:
        return source_lang or self.default_source_lang

    async def _translate_one(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        semaphore: asyncio.Semaphore,
        timeout: float | None,
    ) -> SlotResult:
        async with semaphore:
            try:
                translated = await self.translator.translate(
                    text, source_lang, target_lang, timeout=timeout
                )
            except UpstreamError as e:
                logger.warning("Translation %s|%s failed: %s", source_lang, target_lang, e)
                return Failed(str(e) or type(e).__name__)
            except Exception as e:
                logger.exception("Unexpected error translating %s|%s", source_lang, target_lang)
                return Failed(str(e) or type(e).__name__)
        return Translated(translated)

    async def fan_out(
        self,
        text: str,
        source_lang: str,
        target_langs: Sequence[str],
        timeout: float | None = None,
    ) -> dict[str, SlotResult]:
        """
        Runs one upstream call per distinct target language, at most
        concurrency_limit at a time. The returned mapping keeps the order
        in which each language first appeared in target_langs.
        """
        langs = list(dict.fromkeys(target_langs))
        if not langs:
            return {}

        semaphore = asyncio.Semaphore(self.concurrency_limit)
        results = await asyncio.gather(
            *(
                self._translate_one(text, source_lang, lang, semaphore, timeout)
                for lang in langs
            )
        )
        return dict(zip(langs, results, strict=True))

    async def handle(
        self, request: TranslationRequest, timeout: float | None = None
    ) -> TranslationResponse:
        """
        Translates request.source_text into every target language.

        Never raises for upstream failures: a language whose translation
        failed holds a "[translation error: ...]" placeholder instead.
        Cancellation propagates and abandons in-flight upstream calls.
        """
        source_lang = self.resolve_source_lang(request.source_lang)
        translations = {source_lang: request.source_text}

        slots = await self.fan_out(
            request.source_text, source_lang, request.target_langs, timeout=timeout
        )
        for lang, result in slots.items():
            translations[lang] = render(result)

        failed = sum(1 for r in slots.values() if isinstance(r, Failed))
        logger.info(
            "Translated %d chars from %s into %d language(s), %d failed",
            len(request.source_text),
            source_lang,
            len(slots),
            failed,
        )
        return TranslationResponse(translations=translations)
