"""Helpers for extracting client metadata from requests."""

from fastapi import Request


def get_client_ip(request: Request) -> str:
    """Best-effort client IP: proxy headers first, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_user_agent(request: Request) -> str:
    """User-Agent header or 'unknown'."""
    return request.headers.get("user-agent") or "unknown"
