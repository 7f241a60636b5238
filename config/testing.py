SECRET_KEY = "test-secret"

HR_API_BASE_URL = "https://hr.test/api"
HR_API_TIMEOUT = 5
HR_API_TOKEN = None

DEFAULT_PROJECT = "Exozen - Ops"

LOG_LEVEL = "DEBUG"
DEBUG = False
TESTING = True
