import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from healthbuddy.core.config import Base, engine, settings
from healthbuddy.core.exceptions import register_exception_handlers
from healthbuddy.api.routers import auth, activities, goals, reminders, profiles, chat, chat_messages
import healthbuddy.models  # noqa: F401  (registers every table with Base.metadata)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("healthbuddy")

# =====================================================================
# CREATE APP
# =====================================================================

app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    description="HealthBuddy wellness chat API",
    version="1.0.0",
)

# =====================================================================
# CORS MIDDLEWARE - MUST BE FIRST!
# =====================================================================

origins = settings.CORS_ORIGINS

logger.info(f"CORS allowed origins: {origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Authorization"],
)

# =====================================================================
# REQUEST LOGGING
# =====================================================================


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


register_exception_handlers(app)

# =====================================================================
# DATABASE INITIALIZATION
# =====================================================================

Base.metadata.create_all(bind=engine)

# =====================================================================
# HEALTH CHECK (before routers)
# =====================================================================


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/api/test")
def server_test():
    return {"message": "Server is running!"}


# =====================================================================
# ROUTES
# =====================================================================

app.include_router(auth.router)
app.include_router(activities.router)
app.include_router(goals.router)
app.include_router(reminders.router)
app.include_router(profiles.router)
app.include_router(chat.router)
app.include_router(chat_messages.router)

logger.info("All routers included")

# =====================================================================
# ROOT ENDPOINT
# =====================================================================


@app.get("/")
def root():
    """API root endpoint."""
    return {
        "message": "Welcome to HealthBuddy API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "auth": "/auth",
            "chat": "/api/chat",
            "activities": "/api/activities",
            "goals": "/api/goals",
            "reminders": "/api/reminders",
            "profiles": "/api/profiles",
            "chat_messages": "/api/chat-messages",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
