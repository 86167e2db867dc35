"""
PlagiarismLens FastAPI application entry point.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from contextvars import ContextVar

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.database.init_db import init_database
from app.routes.cluster import router as cluster_router
from app.routes.health import router as health_router
from app.routes.submissions import router as submissions_router

# Request ID context variable
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


# Custom logging filter to add request_id
class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s request_id=%(request_id)s",
)

# Filter on handlers so records from every logger get request_id
for handler in logging.getLogger().handlers:
    handler.addFilter(RequestIDFilter())


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    yield


# Create FastAPI app
app = FastAPI(
    title="PlagiarismLens",
    description="Plagiarism scoring and similarity clustering for assignment submissions",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request ID middleware
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request_id_var.set(request_id)

    logger = logging.getLogger("app.request")
    logger.info(
        f"Request started method={request.method} url={str(request.url)} client_ip={request.client.host if request.client else 'unknown'}"
    )

    response = await call_next(request)

    logger.info(f"Request completed status_code={response.status_code}")

    return response


# Include routers
app.include_router(health_router, tags=["health"])
app.include_router(submissions_router, tags=["submissions"])
app.include_router(cluster_router, tags=["cluster"])
