from helpers.naive_diff import (
    NaiveLCS,
    ScriptVerifier,
    lcs,
    lcs_length,
    edit_distance,
    verify_script,
)


__all__ = [
    "NaiveLCS",
    "ScriptVerifier",
    "lcs",
    "lcs_length",
    "edit_distance",
    "verify_script",
]
