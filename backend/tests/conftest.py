"""Root conftest — shared test configuration."""

import os

# Tests never talk to a real database or a real auth provider
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_JWT_SECRET", "test-signing-secret-0123456789abcdef")
os.environ.setdefault("SETUP_TOKEN", "test-setup-token")
os.environ.setdefault("SEED_PERMISSIONS_ON_STARTUP", "false")
