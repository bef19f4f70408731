"""Core business logic layer.

Subpackages:
- pricing: monthly price quotes for a plan selection
- lifecycle: subscription creation and status transitions
- reporting: dashboard metrics and exports
- security: rate limiting and anti-forgery tokens
- auth: accounts and sessions
- testimonials: customer reviews
"""
__all__ = ["pricing", "lifecycle", "reporting", "security", "auth", "testimonials"]
