"""
HTTP API for Translation Hub (FastAPI).
"""
