"""
API module - FastAPI routers, route handlers and dependency providers.

Usage:
    from portal.api.routes import api_router
    app.include_router(api_router)
"""
