import os
from dotenv import load_dotenv

load_dotenv()

# Gateway that fronts the restaurant, order and delivery services
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8082/api/v1")
NOTIFICATION_BASE_URL = os.getenv("NOTIFICATION_BASE_URL", "http://localhost:8080/api")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))

def validate_settings(raise_on_missing: bool = False):
	missing = []
	if not API_BASE_URL:
		missing.append('API_BASE_URL')
	if not NOTIFICATION_BASE_URL:
		missing.append('NOTIFICATION_BASE_URL')
	if missing and raise_on_missing:
		raise EnvironmentError(f"Missing required env vars: {', '.join(missing)}")
	return missing
