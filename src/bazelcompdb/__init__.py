"""bazel-compdb: generate a clang compilation database from Bazel targets."""

__version__ = "0.1.0"
