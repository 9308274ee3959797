"""FastAPI dependencies for API endpoints."""

from __future__ import annotations

from ytcast.container import Container, container


def get_container() -> Container:
    """
    Dependency for the application container.

    Tests override this dependency to inject a container built from test
    settings and a deterministic metadata provider.

    Returns
    -------
    Container
        The process-wide container.
    """
    return container
