"""Serving loop — ASGI request pipeline, handlers, file serving, access log."""
