from __future__ import annotations
from typing import List


DEFAULT_FILE_EXTENSIONS: List[str] = [
    "py", "rs", "js", "ts", "jsx", "tsx", "go", "java", "kt", "rb", "php", "cs",
    "c", "h", "cpp", "hpp", "swift", "sh", "bash", "zsh",
    "toml", "yaml", "yml", "ini", "cfg",
]

DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    "target/*",
    ".git/*",
    "node_modules/*",
    "__pycache__/*",
    ".venv/*",
]

DEFAULT_CONTEXT_LINES = 3

# A line must match one of these before marker patterns are tried.
DEFAULT_COMMENT_PREFIXES: List[str] = [
    r"//",
    r"^\s*#",
    r"/\*",
    r"^\s*\*",
    r"^\s*--",
]

# The marker type is read from the keyword in each pattern's own source.
DEFAULT_TODO_PATTERNS: List[str] = [
    r"(?i)\bTODO\b:?\s*(.*)",
    r"(?i)\bFIXME\b:?\s*(.*)",
    r"(?i)\bHACK\b:?\s*(.*)",
    r"(?i)\bNOTE\b:?\s*(.*)",
    r"(?i)\bBUG\b:?\s*(.*)",
]

DEFAULT_FUNCTION_PATTERNS: List[str] = [
    r"^\s*(pub(?:\([\w:]+\))?\s+)?(?:async\s+)?fn\s+(\w+)",
    r"^\s*(?:async\s+)?def\s+(\w+)",
    r"^\s*class\s+(\w+)",
    r"^\s*(?:export\s+)?(?:async\s+)?function\s+(\w+)",
    r"^\s*func\s+(?:\([^)]*\)\s*)?(\w+)",
]
