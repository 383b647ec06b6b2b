import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from config import settings
from middleware import RequestLogMiddleware
from routes.posts import router as posts_router
from services.firestore import FirestorePostRepository

logging.basicConfig(level=settings.log_level,
                    format="%(asctime)s  %(levelname)-8s %(name)s  %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(settings.firebase_credentials)
    firebase_app = firebase_admin.initialize_app(cred)
    app.state.post_repository = FirestorePostRepository(firebase_app)
    logger.info("Connected to Firestore using %s", settings.firebase_credentials)

    yield
    # Cleanup resources
    firebase_admin.delete_app(firebase_app)


app = FastAPI(lifespan=lifespan)

# middleware to log each request
app.add_middleware(RequestLogMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 Bad Request"""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


# Include routers
app.include_router(posts_router, prefix="/api/posts", tags=["posts"])
