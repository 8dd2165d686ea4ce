"""
Latinium - Latin grammatical analysis API
Serves POST /api/analyze and GET /api/diagnosis backed by Gemini.
"""

import logging
import os

from latinium.app import create_app
from latinium.config import load_settings

settings = load_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s",
)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
