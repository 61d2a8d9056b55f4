"""HTTP routers."""

from .assessments import router as assessments_router

__all__ = ['assessments_router']
