# topmark:header:start
#
#   project      : ShapeGen
#   file         : exit_codes.py
#   file_relpath : src/shapegen/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the ShapeGen CLI.

ShapeGen aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the ShapeGen CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure. Prefer a more specific code if available.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        MODEL_ERROR: The model document is malformed. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        UNSUPPORTED_SHAPE: The model uses a shape kind that cannot be generated.
            Mirrors BSD ``EX_UNAVAILABLE (69)``.
        GENERATION_ERROR: A generation fault (collision, missing state). Mirrors
            BSD ``EX_SOFTWARE (70)``.
        IO_ERROR: I/O error writing generated files. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Missing or invalid configuration. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    MODEL_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    UNSUPPORTED_SHAPE = 69  # EX_UNAVAILABLE
    GENERATION_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
