import os

# Keep request logs quiet unless a test asks for them
os.environ.setdefault("LOG_LEVEL", "WARNING")
