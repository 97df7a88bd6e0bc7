"""Fixed names, permission modes and environment prefix for CLI settings."""

from typing import Final

# Settings directory and file names under the user's home directory
SETTINGS_DIRNAME: Final = ".circleci"
CONFIG_FILENAME: Final = "cli.yml"
UPDATE_CHECK_FILENAME: Final = "update_check.yml"

# Prefix for CIRCLECI_CLI_HOST, CIRCLECI_CLI_ENDPOINT and CIRCLECI_CLI_TOKEN
ENV_PREFIX: Final = "circleci_cli"

# Owner-only permissions
DIR_MODE: Final = 0o700
FILE_MODE: Final = 0o600
