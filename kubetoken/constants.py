# The name of the project
PROJECT_NAME = "kubetoken"

# The environment variable that overrides the kubeconfig location
KUBECONFIG_ENV_VAR = "KUBECONFIG"

# The kubeconfig location used when the override is not set
DEFAULT_KUBECONFIG_PATH = "~/.kube/config"

# Every token starts with this prefix
TOKEN_PREFIX = "sha256~"

# The number of URL-safe base64 characters after the prefix
TOKEN_BODY_LENGTH = 43

# Shown to the user when a token does not have the expected shape
TOKEN_EXAMPLE = f"{TOKEN_PREFIX}{'x' * TOKEN_BODY_LENGTH}"
