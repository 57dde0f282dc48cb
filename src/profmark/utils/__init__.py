# topmark:header:start
#
#   project      : ProfMark
#   file         : __init__.py
#   file_relpath : src/profmark/utils/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Small helpers shared by the CLI."""
