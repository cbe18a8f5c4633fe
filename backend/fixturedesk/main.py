import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fixturedesk.config import CORS_ORIGINS, configure_logging
from fixturedesk.database import init_db
from fixturedesk.routes import exports, fixtures, matches, players, public, tournaments

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Fixture Desk API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(tournaments.router, prefix="/api", tags=["tournaments"])
app.include_router(players.router, prefix="/api", tags=["players"])
app.include_router(fixtures.router, prefix="/api", tags=["fixtures"])
# Match runtime (status + scoring + history)
app.include_router(matches.router, prefix="/api", tags=["matches"])
app.include_router(exports.router, prefix="/api", tags=["exports"])
# Public read-only (no auth)
app.include_router(public.router, prefix="/api", tags=["public"])


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("Registered %d routes", len(app.routes))


@app.get("/api/health")
def health_check():
    return {"app_name": "Fixture Desk API", "status": "healthy"}
