"""
Main application entry point
"""

import uvicorn
from task_api.config.settings import settings


def main():
    """Serve the task API with uvicorn"""
    uvicorn.run(
        "task_api.web.main:app",
        host=settings.WEB_HOST,
        port=settings.WEB_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
