"""Routing — the API route table and handler-file discovery.

Routes are registered during setup and the table is frozen before the
server handles its first request.
"""
