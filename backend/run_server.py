"""Run the MediServe API with uvicorn.

Usage: python run_server.py [port]
"""
import sys

import uvicorn

from mediserve.core.config import settings

if __name__ == "__main__":
    port = int(sys.argv[1]) if len(sys.argv) > 1 else 8000
    print(f"[*] MediServe backend ({settings.ENVIRONMENT}) on http://127.0.0.1:{port}")
    uvicorn.run(
        "mediserve.main:app",
        host="127.0.0.1",
        port=port,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
