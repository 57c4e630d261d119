"""run_dev.py — Start the Admin Tools API in development mode.

Equivalent CLI command (run from backend/):
    uvicorn api.main:app --reload --host 127.0.0.1 --port 8000

Create an API key first:
    python scripts/create_admin.py you@example.com
"""

import uvicorn

from core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="127.0.0.1",
        port=8000,
        reload=not settings.is_production,
        log_level=settings.log_level.lower(),
    )
