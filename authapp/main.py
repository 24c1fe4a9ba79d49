import logging

from fastapi import FastAPI
import fastapi
from starlette.exceptions import HTTPException as StarletteHTTPException

from authapp.config import LOG_LEVEL
from authapp.database import Base, engine, SessionLocal
from authapp.language import get, get_text
from authapp.models import user as user_model, registration, todo, role, action_token  # noqa: F401
from authapp.routers import auth, user as user_router, todos, roles
from authapp.seed import seed_route_roles

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("authapp")

Base.metadata.create_all(bind=engine)


def _seed():
    db = SessionLocal()
    try:
        added = seed_route_roles(db)
        if added:
            logger.info("seeded %d route roles", added)
    finally:
        db.close()

_seed()

app = FastAPI(title="AuthApp")

# API routers
app.include_router(auth.router)
app.include_router(user_router.router)
app.include_router(todos.router)
app.include_router(roles.router)


@app.get("/")
def read_root():
    return {"status": "ok"}


# Errors raised by the routers carry an already localized message
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    return fastapi.responses.JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# Generic error handler to return JSON errors for unexpected exceptions
@app.exception_handler(Exception)
async def generic_exception_handler(request, exc):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    message = get(get_text(request.headers.get("locale")), "common.errors.internal")
    return fastapi.responses.JSONResponse(status_code=500, content={"message": message})
