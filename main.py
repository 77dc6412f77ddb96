import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Routers
from routers.health import router as health_router
from routers.questions import router as questions_router
from routers.sessions import router as sessions_router
from routers.topics import router as topics_router
from settings import CORS_ORIGINS

logger = logging.getLogger("helix")
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Helix – Practice API")

# Allow calls from the front-end dev server (override with HELIX_CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-session-id"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(topics_router)  # /topics, /topics/{id}/explainer
app.include_router(questions_router)  # /questions
app.include_router(sessions_router)  # /sessions, /session/...
app.include_router(health_router)  # /health
