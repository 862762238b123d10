"""Configuration settings for the Odin web application."""

import os


DATABASE_PATH = os.environ.get("ODIN_DATABASE_PATH", "/app/data/odin.db")

ODIN_HOST = os.environ.get("ODIN_HOST", "0.0.0.0")

ODIN_PORT = int(os.environ.get("ODIN_PORT", "1337"))

# Upper bound on artifact recomputations running at once for one refresh
REFRESH_CONCURRENCY = int(os.environ.get("ODIN_REFRESH_CONCURRENCY", "8"))

TAG_ID_MAX_LENGTH = 15

TAG_EMAIL_MAX_LENGTH = 250

DEFAULT_PAGE_LIMIT = int(os.environ.get("ODIN_DEFAULT_PAGE_LIMIT", "30"))
