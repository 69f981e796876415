"""Composition root for the buildhooks relay.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Provider registry construction
- Trigger API strategy selection (real or log only)
- Core service initialization
- Webhook HTTP server start
"""

import asyncio
import logging
import sys
from dataclasses import dataclass

from pydantic import ValidationError

from buildhooks.adapters.providers.github import GitHubProvider
from buildhooks.adapters.trigger_api.bitrise import BitriseTriggerAPI
from buildhooks.adapters.trigger_api.logging_only import LoggingTriggerAPI
from buildhooks.adapters.webhook.http_server import WebhookHTTPServer
from buildhooks.adapters.webhook.receiver import WebhookReceiver
from buildhooks.config import VERSION, Settings, load_settings
from buildhooks.core.dispatcher import TriggerDispatcher
from buildhooks.core.hook_service import HookService
from buildhooks.core.ports import TriggerAPIPort
from buildhooks.core.registry import ProviderRegistry
from buildhooks.core.trigger_url import TriggerURLResolver


def build_registry() -> ProviderRegistry:
    """Create the provider registry.

    New webhook sources are supported by registering another
    ProviderPort implementation here.
    """
    return ProviderRegistry(
        {
            "github": GitHubProvider(),
        }
    )


def build_trigger_api(settings: Settings) -> TriggerAPIPort:
    """Select the trigger API strategy for the configured environment."""
    if settings.only_log_triggers:
        return LoggingTriggerAPI()
    return BitriseTriggerAPI(timeout_seconds=settings.trigger_timeout_seconds)


@dataclass
class Application:
    """Wired application components."""

    settings: Settings
    registry: ProviderRegistry
    trigger_api: TriggerAPIPort
    hook_service: HookService
    receiver: WebhookReceiver
    http_server: WebhookHTTPServer


def build_application(settings: Settings) -> Application:
    """Instantiate adapters and core services from settings."""
    registry = build_registry()
    trigger_api = build_trigger_api(settings)

    hook_service = HookService(
        registry=registry,
        resolver=TriggerURLResolver(
            api_root_url=settings.bitrise_api_root_url,
            override_url=settings.send_request_to_url,
        ),
        dispatcher=TriggerDispatcher(trigger_api),
    )
    receiver = WebhookReceiver(
        hook_port=hook_service,
        environment_mode=settings.env_mode,
        version=VERSION,
    )
    http_server = WebhookHTTPServer(
        webhook_receiver=receiver,
        host=settings.webhook_host,
        port=settings.webhook_port,
    )
    return Application(
        settings=settings,
        registry=registry,
        trigger_api=trigger_api,
        hook_service=hook_service,
        receiver=receiver,
        http_server=http_server,
    )


TEXT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
JSON_LOG_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure logging for the relay.

    httpx logs every outbound request at INFO, which would repeat each
    build trigger line; it is raised to WARNING unless DEBUG is requested.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" for one JSON object per line, "text" otherwise.
    """
    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format=JSON_LOG_FORMAT if log_format == "json" else TEXT_LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    )


async def bootstrap() -> None:
    """Load configuration, wire adapters, and serve webhooks.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Wire registry, trigger API, core services and HTTP server
    4. Serve until cancelled

    Raises:
        SystemExit: On fatal errors (configuration, adapter initialization)
        asyncio.CancelledError: On graceful shutdown signal
    """
    settings = load_settings()

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info(f"Loading buildhooks {VERSION} in {settings.env_mode} mode...")

    app = build_application(settings)
    logger.info(f"Supported providers: {', '.join(app.registry.service_ids())}")
    if settings.send_request_to_url:
        logger.info(f"Sending every build request to: {settings.send_request_to_url}")
    elif settings.only_log_triggers:
        logger.info("Build triggers are only logged (development mode)")

    try:
        await app.http_server.start()
        while True:
            await asyncio.sleep(1)
    finally:
        await app.http_server.stop()
        await app.trigger_api.close()


def main() -> None:
    """Run the webhook relay until interrupted.

    Exit codes:
        0: Server cancelled cleanly
        1: Invalid configuration or a fatal server error
        130: Stopped with SIGINT
    """
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(bootstrap())
    except ValidationError as e:
        logger.error(f"Invalid buildhooks configuration:\n{e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Webhook server stopped (SIGINT)")
        sys.exit(130)
    except asyncio.CancelledError:
        logger.info("Webhook server cancelled")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Webhook server failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
