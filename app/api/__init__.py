"""
API module - FastAPI routers and global error handlers.

Usage:
    from app.api.routes import api_router
    from app.api.error_handlers import register_error_handlers
"""
