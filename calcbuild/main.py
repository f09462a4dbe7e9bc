from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import projects

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("calcbuild")

# Single key-value table, no migrations needed
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="CalcBuild",
    description="Local-first paint, render and insulation estimator",
    version="1.0.0"
)

# The UI runs in the user's own browser against this local app
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projects.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "calcbuild"}


def run():
    """Serve the app on localhost (console script entry point)."""
    import uvicorn
    logger.info("Starting CalcBuild on http://127.0.0.1:8000")
    uvicorn.run(app, host="127.0.0.1", port=8000)


if __name__ == "__main__":
    run()
