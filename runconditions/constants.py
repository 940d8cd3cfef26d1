"""Run condition constants

Centralized constants for the working directory name and config file names.
"""

# The name of the working directory in user space and project space.
# Every space follows: base_path / AI_DIR / config / CONDITIONS_CONFIG
AI_DIR = ".ai"

CONDITIONS_CONFIG = "conditions.yaml"

LOG_PREFIX = "runconditions"

# Logger the build console lines go to when the host supplies none
BUILD_LOGGER = f"{LOG_PREFIX}.build"
