"""Constants used throughout mygit."""

import zlib

# Directory names
GIT_DIR = ".git"
OBJECTS_DIR = "objects"
REFS_DIR = "refs"

# File names
HEAD_FILE = "HEAD"
DEFAULT_BRANCH = "main"
HEADS_PREFIX = "refs/heads/"
SYMREF_PREFIX = "ref: "

# Object types
BLOB = "blob"
TREE = "tree"

# Tree entry modes
MODE_FILE = "100644"
MODE_DIR = "040000"

# Hash algorithm
HASH_ALGORITHM = "sha1"
HASH_LENGTH = 40  # SHA-1 produces 40 hex characters
DIGEST_SIZE = 20

# Stored objects are world-readable, like git's loose objects
OBJECT_FILE_MODE = 0o644

# Compression
ZLIB_LEVEL = zlib.Z_DEFAULT_COMPRESSION

# Logging
LOG_LEVEL_ENV = "MYGIT_LOG_LEVEL"

# Exit codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2
EXIT_DATA_ERROR = 3
