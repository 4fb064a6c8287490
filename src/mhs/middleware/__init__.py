"""Middleware — request/response wrappers around route dispatch."""

from mhs.middleware.cors import CORS_HEADERS, CORSMiddleware
from mhs.middleware.protocol import Middleware, Next

__all__ = ["CORS_HEADERS", "CORSMiddleware", "Middleware", "Next"]
