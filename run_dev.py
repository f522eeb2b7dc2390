# run_dev.py
"""
Local development launcher for FastAPI.
Equivalent to: `uvicorn studybot.app:app --reload --host 0.0.0.0 --port $PORT`
"""

import uvicorn

from studybot.settings import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "studybot.app:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=not settings.is_production,
    )
