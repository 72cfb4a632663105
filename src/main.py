import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from src.conf.config import settings

from src.routes import auth, contact, users
from src.database.db import engine, init_models

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Contacts API",
    description="API for managing contacts owned by authenticated users.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(contact.router)


@app.on_event("startup")
async def startup_event():
    """
        Startup event handler that connects to the database and makes sure
        the users and contacts tables exist.

        A failed connection is logged and the process exits with status 1.
        """
    logger.info("Starting up application...")
    try:
        await init_models(engine)
    except (SQLAlchemyError, OSError) as e:
        logger.error("Could not connect to the database: %s", e)
        sys.exit(1)
    logger.info("Database connected: %s", engine.url.render_as_string(hide_password=True))
    logger.info("Application startup complete.")

@app.get("/")
async def read_root():
    """
        Root endpoint for the Contacts API.

        Returns:
            dict: A welcome message.
        """
    return {"message": "Welcome to the Contacts API!"}
