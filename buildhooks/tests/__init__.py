"""Test suite for the buildhooks relay.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - GitHub provider payload handling
   - Trigger API clients against a mocked transport
   - HTTP server against a live local socket

3. fakes/: Port implementations for testing
   - In-memory implementations of ProviderPort, TriggerAPIPort, HookPort
"""
