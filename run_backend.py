#!/usr/bin/env python3
"""Start the Room Sketch Engine API server."""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "roomsketch.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_dirs=["roomsketch"],
    )
