"""Scan source trees for TODO/FIXME/HACK/NOTE/BUG comments."""

__version__ = "0.1.0"
