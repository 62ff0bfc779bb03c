"""Global pytest configuration."""

import os

# Seed configuration before any app imports
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id.apps.googleusercontent.com")
os.environ.setdefault("JWT_ISSUER", "clipboard-api-test")
os.environ.setdefault("JWT_AUDIENCE", "clipboard-web-test")
os.environ.setdefault("JWT_SIGNING_KEY", "test-signing-key-with-at-least-32-bytes!")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("CORS_ALLOWED_ORIGINS", "http://localhost:5173")
