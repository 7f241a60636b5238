import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

HR_API_BASE_URL = os.getenv("HR_API_BASE_URL", "https://cafm.zenapi.co.in/api")
HR_API_TIMEOUT = float(os.getenv("HR_API_TIMEOUT", "20"))
HR_API_TOKEN = os.getenv("HR_API_TOKEN") or None

# Project the Manager-Ops reports are pinned to
DEFAULT_PROJECT = os.getenv("DEFAULT_PROJECT", "Exozen - Ops")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
