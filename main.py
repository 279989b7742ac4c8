import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import LOG_LEVEL, AUTO_CREATE_TABLES
from db import init_db
from routes import risk_registry, registry_assessment, risk_assessment, strategic, reports
from routes.responses import internal_error, validation_error

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Risk Registry")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected %s %s: %s issue(s)", request.method, request.url.path, len(exc.errors()))
    return validation_error(exc.errors())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return internal_error()


if AUTO_CREATE_TABLES:
    init_db()

app.include_router(risk_registry.router)
app.include_router(registry_assessment.router)
app.include_router(risk_assessment.router)
app.include_router(strategic.router)
app.include_router(reports.router)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
