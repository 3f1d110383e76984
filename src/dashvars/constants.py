"""Constants shared by the extractor, loader and CLI."""

import re

# -----------------------------------------------------------------------------
# Reference Syntax
# -----------------------------------------------------------------------------
# Bare form:       $name
# Delimited forms: ${name}, ${name:format}, ${name.field}
#
# The capture is deliberately wider than a variable name (\w+) so that a token
# like "$1abc" is consumed whole and then rejected, instead of leaving "abc"
# behind to be matched on its own.
VARIABLE_REFERENCE_PATTERN: re.Pattern[str] = re.compile(
    r"\$(\w+)|\$\{(\w+)(?:\.([^:}]+))?(?::([^}]+))?\}",
    re.ASCII,
)

# A referenced name must look like an identifier. All-digit captures such as
# $1 are regex back-references in the underlying query language.
VARIABLE_NAME_PATTERN: re.Pattern[str] = re.compile(r"[A-Za-z_][A-Za-z0-9_]*", re.ASCII)


# -----------------------------------------------------------------------------
# Declaration Documents
# -----------------------------------------------------------------------------

# Keys of a variable spec that are not part of the payload
# handed to the extractor ("display" is UI text only).
NON_PAYLOAD_SPEC_KEYS: frozenset[str] = frozenset({"name", "display"})

SUPPORTED_FILE_SUFFIXES: frozenset[str] = frozenset({".yaml", ".yml", ".json"})
