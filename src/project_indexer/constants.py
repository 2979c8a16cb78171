"""Constants for project-indexer."""

# Snapshot file
DEFAULT_SNAPSHOT_NAME = ".project-indexer.idx"
SNAPSHOT_SUFFIX = ".idx"

# Project configuration files (at the project root)
CONFIG_FILE = ".project-indexer.yaml"
IGNORE_FILE = ".project-indexerignore"

# Environment overrides
FILENAME_ENV_VAR = "PROJECT_INDEXER_FILENAME"

# Marker directories that identify a project root
ROOT_MARKERS = (".git", "node_modules")

# Version control metadata directories, never scanned
VCS_DIRS = (".git", ".hg", ".svn")

# Version
INDEXER_VERSION = "0.1.0"
