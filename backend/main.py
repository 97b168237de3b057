# backend/main.py
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database import init_db
from schemas.common import fail, ok

from routes.auth import router as auth_router
from routes.products import router as products_router
from routes.users import router as users_router
from routes.orders import router as orders_router
from routes.cart import router as cart_router
from routes.logs import router as logs_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Comic Store API", version="1.0.0")

    origins = ["*"]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Every error leaves as {success: false, message, data: null}
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=fail(str(exc.detail)), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(status_code=422, content=fail(f"Invalid request: {details}"))

    @app.get("/health")
    def health():
        return ok("Server is running")

    app.include_router(auth_router)
    app.include_router(products_router)
    app.include_router(users_router)
    app.include_router(orders_router)
    app.include_router(cart_router)
    app.include_router(logs_router)

    return app


init_db()
app = create_app()

if __name__ == "__main__":
    logger.info("Starting server at http://%s:%s", settings.APP_HOST, settings.APP_PORT)
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)
