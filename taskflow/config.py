import os

DB_URI = os.getenv("TASKFLOW_DB", "sqlite:///taskflow.db")
PORT = int(os.getenv("TASKFLOW_PORT", 5000))
LOG_LEVEL = os.getenv("TASKFLOW_LOG_LEVEL", "INFO").upper()

# API client
API_URL = os.getenv("TASKFLOW_API_URL", f"http://localhost:{PORT}")
REQUEST_TIMEOUT = float(os.getenv("TASKFLOW_TIMEOUT", 10))
