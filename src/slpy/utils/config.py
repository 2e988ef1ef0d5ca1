"""
Configuration constants to replace magic numbers throughout SLPy
"""

# Lexical constants
TAB_STOP = 8  # Tabs advance the column to the next multiple of 8 (plus 1)
STRING_QUOTE_CHAR = '"'
ESCAPE_CHAR = "\\"
COMMENT_CHAR = "#"
NEWLINE_CHAR = "\n"
INDENT_CHARS = " \t"
SINGLE_CHAR_OPERATORS = frozenset("=+-*()")

# Reserved words are captured positionally by the grammar, never identifiers
RESERVED_WORDS = frozenset({"print", "pass", "input", "int"})

# Escape sequences inside string literals: escaped letter -> actual character
ESCAPE_SEQUENCES = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
}

# File constants
DEFAULT_FILE_ENCODING = "utf-8"
SOURCE_FILE_EXTENSION = ".slpy"
DEFAULT_SOURCE_NAME = "<stdin>"

# Rendering constants
DEFAULT_RENDER_INDENT = ""

# Error reporting constants
TERSE_ERROR_MARKER = "ERROR"
TOKEN_DUMP_RULE = "-" * 34

# Environment variables
COLOR_ENV_VAR = "SLPY_COLOR"
NO_COLOR_ENV_VAR = "NO_COLOR"
LOG_LEVEL_ENV_VAR = "SLPY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
