import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("STORAGE_BACKEND", "local")
os.environ.setdefault("DATA_API_URL", "http://testserver")
os.environ.setdefault("DATA_API_KEY", "test_api_key")
os.environ.setdefault("CHART_LOCALE", "es-ES")
os.environ.setdefault("API_MAX_RETRIES", "0")
os.environ.setdefault("API_RETRY_INITIAL_DELAY", "0")
