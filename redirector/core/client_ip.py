"""Client address resolution shared by logging, rate limiting and click events."""

from starlette.requests import Request


def get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.

    Handles proxies and load balancers by checking X-Forwarded-For header.

    Args:
        request: Starlette/FastAPI Request object

    Returns:
        IP address as string
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs, take the first one
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    return request.client.host if request.client else "unknown"
