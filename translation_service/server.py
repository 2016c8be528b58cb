import asyncio
import logging
import signal

import grpc
from grpc_reflection.v1alpha import reflection

from translation_service.config import Settings, settings
from translation_service.core.handler import TranslationHandler, TranslationRequest
from translation_service.core.mymemory import MyMemoryTranslator
from translation_service.core.translator import MockTranslator, Translator
from translation_service.proto import (
    SERVICE_NAME,
    TRANSLATE_METHOD,
    TranslateRequest,
    TranslateResponse,
)

NOTICE_LEVEL = 25
logging.addLevelName(NOTICE_LEVEL, "NOTICE")

logger = logging.getLogger(__name__)


class TranslatorServicer:
    def __init__(self, handler: TranslationHandler):
        self.handler = handler

    async def Translate(  # noqa: N802
        self, request: TranslateRequest, context: grpc.aio.ServicerContext
    ) -> TranslateResponse:
        logger.debug(
            "Received translation request: from=%r langs=%s", request.from_lang, list(request.langs)
        )
        result = await self.handler.handle(
            TranslationRequest(
                source_text=request.text,
                source_lang=request.from_lang,
                target_langs=tuple(request.langs),
            ),
            timeout=context.time_remaining(),
        )
        return TranslateResponse(translations=result.translations)


def build_translator(config: Settings) -> Translator:
    if config.translator_backend == "mock":
        return MockTranslator()
    return MyMemoryTranslator(config.mymemory_base_url, timeout=config.upstream_timeout)


def create_server(
    translator: Translator, config: Settings, address: str | None = None
) -> tuple[grpc.aio.Server, int]:
    """
    Builds a gRPC server exposing TranslatorService and server reflection.
    Returns the server (not yet started) and the bound port.
    """
    handler = TranslationHandler(
        translator,
        default_source_lang=config.default_source_lang,
        concurrency_limit=config.concurrency_limit,
    )
    servicer = TranslatorServicer(handler)

    server = grpc.aio.server()
    rpc_handler = grpc.method_handlers_generic_handler(
        SERVICE_NAME,
        {
            TRANSLATE_METHOD: grpc.unary_unary_rpc_method_handler(
                servicer.Translate,
                request_deserializer=TranslateRequest.FromString,
                response_serializer=TranslateResponse.SerializeToString,
            )
        },
    )
    server.add_generic_rpc_handlers((rpc_handler,))
    reflection.enable_server_reflection((SERVICE_NAME, reflection.SERVICE_NAME), server)

    address = address or config.listen_address
    port = server.add_insecure_port(address)
    if not port:
        raise RuntimeError(f"Failed to bind gRPC listener on {address}")
    return server, port


async def serve(config: Settings = settings) -> None:
    translator = build_translator(config)
    try:
        server, _ = create_server(translator, config)
        await server.start()
        logger.log(NOTICE_LEVEL, "gRPC server listening on %s", config.listen_address)

        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop.set)
        await stop.wait()

        logger.log(NOTICE_LEVEL, "Stopping gRPC server...")
        await server.stop(config.shutdown_grace)
        logger.log(NOTICE_LEVEL, "Server stopped")
    finally:
        await translator.close()


def main() -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler())

    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
