import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Application Constants
APPLICATION_NAME = "redshift-credentials"
VERSION = os.getenv("REDSHIFT_CREDENTIALS_VERSION", "0.1.0")

# Endpoint classification
PROVISIONED_DOMAIN_SUFFIX = ".redshift.amazonaws.com"
SERVERLESS_DOMAIN_SUFFIX = ".redshift-serverless.amazonaws.com"

# AWS Constants
PROVISIONED_SERVICE_NAME = "redshift"
SERVERLESS_SERVICE_NAME = "redshift-serverless"
ACCESS_DENIED_ERROR_PREFIX = "AccessDenied"
CLUSTER_NOT_FOUND_ERROR_CODE = "ClusterNotFound"
MIN_DURATION_SECONDS = 900
MAX_DURATION_SECONDS = 3600

# Output Constants
DEFAULT_ENV_PREFIX = "REDSHIFT_"
OUTPUT_FORMATS = ("env", "json", "yaml", "yml")

# Logger Constants
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
