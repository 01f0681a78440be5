"""Core constants used across taxonomy import modules.

This module centralizes source defaults and storage literals.
Keeping values here avoids magic literals in adapter logic.
"""

from __future__ import annotations

from pathlib import Path

SOURCE_TYPE_LADDR = "laddr"
SOURCE_TYPE_MATCHMAKER = "matchmaker"
SOURCE_TYPE_DEMOCRACYLAB = "democracylab"
SUPPORTED_SOURCE_TYPES = (
    SOURCE_TYPE_LADDR,
    SOURCE_TYPE_MATCHMAKER,
    SOURCE_TYPE_DEMOCRACYLAB,
)

DEFAULT_LADDR_HOST = "codeforphilly.org"
LADDR_TAGS_PATH = "/tags"
LADDR_ACCEPTED_PREFIXES = ("tech", "topic")
LADDR_SILENT_PREFIXES = ("event",)
DEFAULT_MATCHMAKER_URL = (
    "https://github.com/designforsf/brigade-matchmaker/files/2563599/all_json.txt"
)
MATCHMAKER_IDENTITY_FIELD = "class_name"
DEFAULT_DEMOCRACYLAB_URL = (
    "https://raw.githubusercontent.com/DemocracyLab/CivicTechExchange/"
    "master/common/models/Tag_definitions.csv"
)
CSV_CATEGORY_FIELD = "category"
CSV_NAME_FIELD = "canonical_name"
CSV_OPTIONAL_FIELDS = ("parent", "subcategory", "caption")

DOCUMENT_EXTENSION = ".toml"
DEFAULT_GIT_DIR = Path(".git")
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_COMMITTER_NAME = "taxonomy-import"
DEFAULT_COMMITTER_EMAIL = "taxonomy-import@localhost"
GIT_BLOB_MODE = "100644"
GIT_TREE_MODE = "40000"
GIT_HASH_ALGORITHM = "sha1"
