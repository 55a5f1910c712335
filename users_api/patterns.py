"""Regex patterns for route template parsing and path matching."""

import re

# Pattern matching expressions
capture_expr = re.compile(r":(?P<name>[a-zA-Z]*)(?P<tail>[0-9_]?)")
name_pattern = re.compile(r"^[a-zA-Z]+$")

# Regex fragments used to build route matchers
segment_expr = r"[a-z0-9\-_]+"
query_expr = r"(?:\?(?P<query>.*))?"
