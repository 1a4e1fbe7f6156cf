"""Failure-channel primitives shared by action and data-access definitions.

Kept free of FastAPI and pydantic concerns so it can be reused anywhere.
"""
