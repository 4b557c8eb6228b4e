from __future__ import annotations

# Local git queries (rev-parse, tag, log, rev-list)
GIT_TIMEOUT_SECONDS = 30.0

# Release-hosting API calls
API_TIMEOUT_SECONDS = 30.0
