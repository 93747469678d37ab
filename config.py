"""
Configuration for mongo-index-ops

Override any setting via environment variables.
"""

import os

# MongoDB settings
MONGODB_URI = os.environ.get("MONGODB_URI", "mongodb://localhost:27017")
DATABASE_NAME = os.environ.get("DATABASE_NAME", "test")
COLLECTION_NAME = os.environ.get("COLLECTION_NAME", "randomData")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
