from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from timing_asgi import TimingMiddleware, TimingClient  # type: ignore
from timing_asgi.integrations import StarletteScopeToName  # type: ignore

from app.core import config
from app.core.database.engine import init_db, AsyncSessionLocal
from app.core.exceptions import setup_exception_handlers
from app.core.rate_limit import limiter
from app.features.access_rights.catalog import build_catalog
from app.features.access_rights.routes import router as access_right_router
from app.features.groups.routes import router as group_router
from app.features.users.routes import router as user_router
from app.utils import get_logger


log = get_logger(__name__)
log.info("Initializing server")
app = FastAPI(
    title="Access Rights Backend",
    description="Groups, per-module access rights and permission checks",
    version="0.1.0",
    docs_url="/docs" if config.ENABLE_DOCS else None,
    redoc_url="/redoc" if config.ENABLE_DOCS else None,
    openapi_url="/openapi.json" if config.ENABLE_DOCS else None
)
app.state.limiter = limiter
app.state.module_catalog = build_catalog()
setup_exception_handlers(app)


class PrintTimings(TimingClient):
    def timing(self, metric_name, timing, tags):
        log.debug(dict(route=metric_name.removeprefix("main.app.features."), timing=timing, tags=tags))


app.add_middleware(TimingMiddleware, client=PrintTimings(), metric_namer=StarletteScopeToName("main", app))

if config.ENABLE_DOCS:
    log.warning("Docs enabled")
if config.ALLOW_ORIGIN:
    log.warning("Setting allow origin to %s", config.ALLOW_ORIGIN)
    origins = [config.ALLOW_ORIGIN]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.on_event("startup")
async def startup():
    """Initialize database on application startup."""
    log.info("Initializing database...")
    await init_db()
    log.info("Database initialized successfully")

    if config.SEED_ON_STARTUP:
        from app.seed import seed

        async with AsyncSessionLocal() as db:
            await seed(db, app.state.module_catalog)
            await db.commit()


@app.get("/")
async def root():
    """Root endpoint - API health check."""
    return {
        "message": "Access Rights Backend API",
        "version": "0.1.0",
        "status": "online",
        "docs": "/docs" if config.ENABLE_DOCS else None,
        "modules": app.state.module_catalog.available_modules(),
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(access_right_router, prefix="/api/access-rights", tags=["access-rights"])
app.include_router(group_router, prefix="/api/groups", tags=["groups"])
app.include_router(user_router, prefix="/api/users", tags=["users"])
