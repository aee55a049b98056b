from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rehearsal.core.database import prisma
from rehearsal.core.logging import configure_logging
from rehearsal.core.settings import settings
from rehearsal.domains.auth.routes import router as session_router
from rehearsal.domains.project_notes.routes import router as project_notes_router
from rehearsal.domains.projects.routes import router as projects_router
from rehearsal.domains.screenshots.routes import router as screenshots_router
from rehearsal.domains.team_members.routes import router as team_members_router
from rehearsal.domains.team_members.routes import users_router
from rehearsal.domains.teams.routes import router as teams_router
from rehearsal.domains.video_notes.routes import router as video_notes_router
from rehearsal.domains.videos.routes import router as videos_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    logger = configure_logging()
    await prisma.connect()
    logger.info("Database connected")
    yield
    # Shutdown
    await prisma.disconnect()


app = FastAPI(
    title="Rehearsal Review API",
    description="API for team-based rehearsal video review and annotation",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(session_router, prefix="/api/v1")
app.include_router(teams_router, prefix="/api/v1")
app.include_router(team_members_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(projects_router, prefix="/api/v1")
app.include_router(videos_router, prefix="/api/v1")
app.include_router(video_notes_router, prefix="/api/v1")
app.include_router(project_notes_router, prefix="/api/v1")
app.include_router(screenshots_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "Rehearsal Review API is running"}


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}
