"""External adapters for the buildhooks relay.

This package contains all external dependencies (HTTP servers, the
build trigger API client, webhook source parsers) and provides
implementations of the core port interfaces.

Adapter Organization:

- providers/: Webhook source providers (GitHub, ...)
- trigger_api/: Build trigger API clients (real HTTP, log only)
- webhook/: HTTP server receiving inbound webhooks
"""
