# topmark:header:start
#
#   project      : ShapeGen
#   file         : constants.py
#   file_relpath : src/shapegen/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ShapeGen Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    SHAPEGEN_VERSION: str = get_version("shapegen")
except PackageNotFoundError:  # running from a source checkout
    SHAPEGEN_VERSION = "0.0.0"

# Config file names, in lookup order
SHAPEGEN_TOML_NAME: str = "shapegen.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"

# Namespaces with special meaning in a model
PRELUDE_NAMESPACE: str = "smithy.api"
SYNTHETIC_NAMESPACE: str = "smithy.go.synthetic"

# Ids of the runtime-only traits attached by the generator itself
SYNTHETIC_TRAIT_ID: str = "smithy.go.traits#Synthetic"
SYNTHETIC_CLONE_TRAIT_ID: str = "smithy.go.traits#SyntheticClone"

# Banner written at the top of every generated Go file
GENERATED_BANNER: str = "// Code generated by shapegen. DO NOT EDIT."

# Go file conventions
GO_FILE_EXTENSION: str = ".go"
GO_TEST_FILE_SUFFIX: str = "_test"
GO_TEST_PACKAGE_SUFFIX: str = "_test"

DEFAULT_OUTPUT_DIR: str = "build/shapegen"

VALUE_NOT_SET: str = "<not set>"
