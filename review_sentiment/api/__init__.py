"""
FastAPI entrypoint for the sentiment demo.
"""
