from __future__ import annotations

from typing import Any

# Holds the store client created at startup, shared by request handlers.
redis_client: Any | None = None
