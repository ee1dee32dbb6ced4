"""
Cart Offer service - application entry point
REST API that applies the best restaurant offer to a user's cart

Main modules:
- Offer registration per restaurant
- Best-offer application by customer segment
- Mock user segment lookup
- Operation log

Stack: FastAPI + DuckDB + requests (segment service client)
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from typing import Optional

from .core.database import DatabaseManager
from .core.exceptions import BaseApplicationError, DatabaseError
from .core.error_handler import (
    application_error_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from .config import Settings, settings as default_settings, get_segment_map
from .api import api_router
from .services.cart_service import CartOfferService
from .services.log_service import OperationLogService
from .services.offer_store import OfferStore, create_offer_store
from .services.segment_resolver import (
    HttpSegmentResolver,
    SegmentResolver,
    StaticSegmentResolver
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    try:
        app.state.db.init_database()
        print("Database initialized successfully")
    except DatabaseError as e:
        # Keep serving; offers in memory still work and the health check reports it
        print(f"Database initialization failed: {e.message}")
    
    yield
    
    app.state.segment_resolver.close()
    app.state.db.close()


def build_segment_resolver(cfg: Settings, segment_map: dict) -> SegmentResolver:
    if cfg.segment_source == "http":
        return HttpSegmentResolver(cfg.segment_service_url, timeout=cfg.segment_timeout)
    return StaticSegmentResolver(segment_map)


def create_app(
    app_settings: Optional[Settings] = None,
    offer_store: Optional[OfferStore] = None,
    segment_resolver: Optional[SegmentResolver] = None
) -> FastAPI:
    """Build the FastAPI application with explicitly wired collaborators"""
    cfg = app_settings or default_settings
    
    app = FastAPI(
        title=cfg.api_title,
        version=cfg.api_version,
        description="Cart offer API",
        debug=cfg.debug,
        lifespan=lifespan
    )
    
    # Collaborators
    db = DatabaseManager(cfg.database_url)
    segment_map = get_segment_map()
    log_service = OperationLogService(db)
    store = offer_store or create_offer_store(cfg.offer_store, db)
    resolver = segment_resolver or build_segment_resolver(cfg, segment_map)
    
    app.state.settings = cfg
    app.state.db = db
    app.state.segment_map = segment_map
    app.state.log_service = log_service
    app.state.offer_store = store
    app.state.segment_resolver = resolver
    app.state.cart_service = CartOfferService(store, resolver, log_service)
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Exception handlers
    app.add_exception_handler(BaseApplicationError, application_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    
    app.include_router(api_router, prefix=cfg.api_prefix)
    
    # Health check
    @app.get("/health")
    async def health_check():
        try:
            db.get_connection()
            return {
                "status": "healthy",
                "version": cfg.api_version,
                "database": "connected"
            }
        except DatabaseError as e:
            return {
                "status": "unhealthy",
                "version": cfg.api_version,
                "database": f"error: {e.message}"
            }
    
    @app.get("/")
    async def root():
        return {
            "name": cfg.api_title,
            "version": cfg.api_version,
            "description": "Cart offer API"
        }
    
    return app

# Application instance
app = create_app()
