import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mailpolish.config import ALLOWED_ORIGINS, LOG_LEVEL
from mailpolish.errors import ActionError
from mailpolish.routes import action_routes, auth_routes
from mailpolish.services.database import init_db
from mailpolish.services.utils.logger_config import setup_logging

_logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _logger.info("Starting up mailpolish...")
    init_db()
    yield
    _logger.info("Shutting down mailpolish...")


app = FastAPI(
    title="mailpolish",
    description="Email drafts with AI-polished variants",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(action_routes.router)
app.include_router(auth_routes.router)


@app.exception_handler(ActionError)
async def action_error_handler(request: Request, exc: ActionError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed payloads as BAD_REQUEST before any handler runs"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    _logger.info(f"Rejected invalid payload on {request.url.path}: {messages}")
    error = ActionError("BAD_REQUEST", "; ".join(messages) or "Invalid input.")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.get("/health")
async def health():
    """Root endpoint to verify the app is running"""
    return {
        "message": "mailpolish API is running",
        "actions": [route.path for route in action_routes.router.routes],
    }


def main():
    """Start the FastAPI application using uvicorn"""
    import uvicorn
    setup_logging(getattr(logging, LOG_LEVEL, logging.INFO))
    _logger.info("Starting mailpolish application...")

    uvicorn.run(
        "mailpolish.app:app",
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )


def run():
    """Calls :func:`main`

    This function can be used as entry point to create console scripts with setuptools.
    """
    main()


if __name__ == "__main__":
    #     python -m mailpolish.app
    run()
