"""
smarttemplate.utils – Small shared utilities (path matching, dynamic imports).
"""
from .imports import load_object_from_ref
from .paths import is_hidden_path, matches_path_tail

__all__ = ["load_object_from_ref", "is_hidden_path", "matches_path_tail"]
