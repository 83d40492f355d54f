"""
API package containing the HTTP routes.

``router`` aggregates the resource routers (accounts, transactions)
and is mounted under ``/api`` by ``create_app``.  Each resource lives
in its own module under ``endpoints``.
"""
