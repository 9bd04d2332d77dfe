"""Middleware: handler-to-handler transformations.

The router defines the composition contract only; it ships no auth,
logging, or recovery middleware.
"""

from perch.middleware.protocol import Handler, Middleware, Next, NextMiddleware, as_middleware

__all__ = ["Handler", "Middleware", "Next", "NextMiddleware", "as_middleware"]
