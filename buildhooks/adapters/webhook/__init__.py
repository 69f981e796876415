"""Webhook receiver adapters.

Provides the HTTP endpoint external webhook sources call:
- Extract service id, app slug and API token from the request
- Forward the raw request to the HookPort
- Serialize the HookResponse as JSON
"""
