import logging

from fastapi import Depends, FastAPI
import uvicorn

from config import settings
from routers.dependencies import require_api_key
from routers.hook_router import router as hook_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(
    title="Session Labeler",
    description="Derives short, stable labels for conversational sessions",
    version="1.0.0",
)

app.include_router(
    hook_router,
    prefix="/api",
    tags=["Hooks"],
    dependencies=[Depends(require_api_key)],
)


# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# Run app
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=True)
