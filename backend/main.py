import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.router import router
from config import settings
from models.responses import ErrorResponse
from services.errors import ResumeAIError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger("resume_ai")

app = FastAPI(
    title="ResumeAI API",
    description="Resume analysis, ATS checks and cover letters powered by Gemini",
    version="1.0.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.middleware("http")
async def limit_json_body(request: Request, call_next):
    # Uploads are bounded separately by max_upload_size_mb
    if request.headers.get("content-type", "").startswith("application/json"):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            size = int(content_length)
        else:
            # Chunked body: read it once, later reads get the cached bytes
            size = len(await request.body())
        if size > settings.max_request_body_bytes:
            return _error(413, "Request body too large")
    return await call_next(request)


@app.exception_handler(ResumeAIError)
async def resume_ai_error_handler(request: Request, exc: ResumeAIError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return _error(exc.status_code, exc.detail)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) or "body" for err in exc.errors())
    return _error(400, f"Invalid request: {fields}")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, str(exc) or "Internal server error")


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    logger.info("ResumeAI backend running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
