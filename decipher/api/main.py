import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from decipher.api.routes.process import router as process_router
from decipher.config import settings
from decipher.errors import AllModelsFailedError, InputError, MissingCredentialsError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Decipher API",
    description="Dyslexia-friendly text simplification with verified confidence scores",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
    ],
    allow_origin_regex=r"https://.*\.vercel\.app|http://localhost:\d+|chrome-extension://.*",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(process_router)


@app.exception_handler(InputError)
async def input_error_handler(request: Request, exc: InputError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {field}: {first.get('msg', 'invalid value')}" if field else "Invalid request"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=422, content={"error": message})


@app.exception_handler(AllModelsFailedError)
async def all_models_failed_handler(request: Request, exc: AllModelsFailedError) -> JSONResponse:
    # Full per-model diagnostic stays in the logs; readers get a short message.
    logger.error("AI processing failed: %s", exc)
    return JSONResponse(status_code=502, content={"error": "AI processing failed"})


@app.exception_handler(MissingCredentialsError)
async def missing_credentials_handler(request: Request, exc: MissingCredentialsError) -> JSONResponse:
    logger.error("Configuration error: %s", exc)
    return JSONResponse(status_code=500, content={"error": "AI service is not configured"})


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
