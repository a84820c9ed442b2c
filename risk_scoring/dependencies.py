"""Shared FastAPI dependencies."""
from fastapi import Header


def get_organization_id(
    x_organization_id: int = Header(..., ge=1, description="Tenant the request acts for")
) -> int:
    """Organization the request is scoped to, from ``X-Organization-Id``."""
    return x_organization_id
