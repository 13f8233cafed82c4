"""
REST API layer for the showcase site.

Provides a FastAPI application factory whose routers delegate to the
access layer (``showcase.core``) and the derived operations
(``showcase.ops``).  This package handles only HTTP transport concerns:
serialisation, authentication, error mapping, and request context.

Quick start::

    from showcase.api import create_app

    app = create_app()  # ready for uvicorn

Tags:
    showcase, api, REST, FastAPI, transport-layer

Doc-Types:
    api-reference
"""

from showcase.api.app import create_app

__all__ = ["create_app"]
