"""Lock dependency engine: lock graph, tool registry, decoys and transcript.

Kept free of FastAPI and agent concerns so it can be driven by API routes,
the agent runner, scripts and tests alike.
"""
