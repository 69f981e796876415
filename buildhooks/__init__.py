"""buildhooks: relays webhooks from source hosts to a build trigger API."""
