"""Fake implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeProvider: Canned transform results, captured webhooks
- FakeTriggerAPI: Captured trigger calls with configurable failures
- FakeHookPort: Captured hook requests with a canned response
"""

from .hook import FakeHookPort
from .provider import FakeProvider
from .trigger_api import FakeTriggerAPI

__all__ = [
    "FakeHookPort",
    "FakeProvider",
    "FakeTriggerAPI",
]
