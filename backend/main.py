"""Application entry point for the College Management API."""

import uvicorn
from college_api.core.config import get_global_settings

if __name__ == "__main__":
    settings = get_global_settings()
    uvicorn.run(
        "college_api.main:app",
        host="0.0.0.0",
        port=5000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
