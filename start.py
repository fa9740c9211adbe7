"""Render startup - imports the real app with error handling."""
import os
import sys
import traceback

port = int(os.environ.get("PORT", "10000"))

try:
    from src.api.server import app
    print("[start.py] Scenematch app imported", flush=True)
except Exception as e:
    import_error = f"{type(e).__name__}: {e}\n{traceback.format_exc()}"
    print(f"[start.py] IMPORT FAILED: {import_error}", file=sys.stderr, flush=True)
    # Serve the import error so a broken deploy is visible from the health check
    from fastapi import FastAPI
    from fastapi.responses import PlainTextResponse

    app = FastAPI()

    @app.get("/api/health", response_class=PlainTextResponse, status_code=503)
    async def health():
        return f"UNHEALTHY - Import error:\n{import_error}"

import uvicorn

print(f"[start.py] Starting on port {port}", flush=True)
uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")
