"""
API v1 package.

Contains versioned API routes for customer onboarding.
"""

from onboarding.api.v1.routes import router

__all__ = ["router"]
