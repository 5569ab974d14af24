"""
Todo API package.

A FastAPI service exposing a single ``todos`` table over REST. The
application instance lives in ``todo_api.main`` and is served by
``python -m todo_api``.
"""

__version__ = "0.1.0"
