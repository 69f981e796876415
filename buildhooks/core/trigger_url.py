"""Build trigger URL resolution."""

from urllib.parse import urlparse

from .errors import URLResolutionError


def build_trigger_url(api_root_url: str, app_slug: str) -> str:
    """Derive the canonical build trigger endpoint for an app.

    Args:
        api_root_url: Root URL of the build service (e.g. https://app.bitrise.io).
        app_slug: Application identifier.

    Returns:
        The endpoint, {root}/app/{slug}/build/start.json.

    Raises:
        URLResolutionError: If the root is not an absolute http(s) URL or
            the slug is empty or not a single path segment.
    """
    parsed = urlparse(api_root_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise URLResolutionError(f"Invalid API root URL: {api_root_url!r}")
    if not app_slug or not app_slug.strip():
        raise URLResolutionError("App Slug is empty")
    if "/" in app_slug or "?" in app_slug or "#" in app_slug:
        raise URLResolutionError(f"Invalid App Slug: {app_slug!r}")
    return f"{api_root_url.rstrip('/')}/app/{app_slug}/build/start.json"


class TriggerURLResolver:
    """Resolves the trigger endpoint for a request.

    A configured override URL is used unchanged for every app; otherwise
    the canonical endpoint is derived from the app slug.
    """

    def __init__(self, api_root_url: str, override_url: str | None = None):
        self.api_root_url = api_root_url
        self.override_url = override_url or None

    def resolve(self, app_slug: str) -> str:
        """Return the trigger URL for app_slug.

        Raises:
            URLResolutionError: If the canonical endpoint cannot be derived.
        """
        if self.override_url is not None:
            return self.override_url
        return build_trigger_url(self.api_root_url, app_slug)
