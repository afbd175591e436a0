# run_dev.py
"""
Local development launcher for FastAPI.
Equivalent to: `uvicorn docuquery.app:app --reload --host $HOST --port $PORT`
"""

import uvicorn

from docuquery.settings import settings
from docuquery.log import get_logger

if __name__ == "__main__":
    get_logger("docuquery.app").info("AI proxy server listening on port %s", settings.PORT)
    uvicorn.run(
        "docuquery.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
    )
