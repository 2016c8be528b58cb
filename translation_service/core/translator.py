from abc import ABC, abstractmethod


class Translator(ABC):
    @abstractmethod
    async def translate(
        self, text: str, source_lang: str, target_lang: str, timeout: float | None = None
    ) -> str:
        """
        Translate a single string from source_lang into target_lang.
        Raises UpstreamError when the translation cannot be obtained.
        """
        pass

    async def close(self) -> None:
        pass


class MockTranslator(Translator):
    async def translate(
        self, text: str, source_lang: str, target_lang: str, timeout: float | None = None
    ) -> str:
        """
        Prefixes the text with the target language code for testing.
        """
        return f"[{target_lang}] {text}"
