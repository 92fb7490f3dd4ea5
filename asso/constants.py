DEFAULT_REGION = "us-east-1"
DEFAULT_SSO_REGION = "us-east-1"
DEFAULT_SSO_SESSION = "default"

DEFAULT_CONFIG_FILE = "~/.aws/config"
CONFIG_FILE_ENV = "AWS_CONFIG_FILE"

# relative to the AWS config dir
SSO_DIR = "sso"
SSO_CACHE_DIR = "cache"

START_PATH = "/start/"
