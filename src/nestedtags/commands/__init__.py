"""
nestedtags.commands - CLI command implementations
"""

__all__ = [
    "check_cmd",
    "config_cmd",
    "expand_cmd",
    "rules_cmd",
]
