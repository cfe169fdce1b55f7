"""Integration branches: regex, code generation, system setup and syntax rules."""

from __future__ import annotations

import re
from typing import Any

from fearledger.aln_errors import AlnError, InvalidInputError

_SUPPORTED_PLATFORMS = ("linux", "macos", "windows")


def integrate_regex(pattern: str, target: str) -> dict[str, Any]:
    """Report whether ``pattern`` matches anywhere in ``target``.

    Raises InvalidInputError when the pattern does not compile.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise InvalidInputError(str(exc)) from exc
    return {"status": "success", "matched": compiled.search(target) is not None}


def generate_code(prompt: str, language: str) -> dict[str, Any]:
    """A generated snippet annotated with its language and prompt; nothing is run."""
    return {"status": "generated", "code": f"// generated({language}): {prompt}"}


def setup_environment(platform: str, hardware: str) -> dict[str, Any]:
    """Describe an environment setup, or an error for unsupported platforms."""
    if platform not in _SUPPORTED_PLATFORMS:
        return {"status": "error", "message": "Unsupported platform"}
    return {"status": "environment_setup", "platform": platform, "hardware": hardware}


def define_syntax(rule: str, semantic_action: str) -> dict[str, Any]:
    """Record a syntax rule; raises InvalidInputError for a blank rule."""
    if not rule.strip():
        raise InvalidInputError("empty rule")
    return {"status": "syntax_defined", "rule": rule, "semantic_action": semantic_action}


def _error_result(exc: AlnError) -> dict[str, Any]:
    return {"status": "error", "error": str(exc)}


def integrate_all(user_id: str) -> dict[str, Any]:
    """Run every branch with its standard arguments and gather the results."""
    try:
        regex_res = integrate_regex("^ALIEN_.*$", "commands")
    except AlnError as exc:
        regex_res = _error_result(exc)
    codex_res = generate_code("Generate ALN script for session management", "ALN")
    system_res = setup_environment("linux", "virtual")
    try:
        language_res = define_syntax("@ACTION {.*}", "Execute action block")
    except AlnError as exc:
        language_res = _error_result(exc)

    return {
        "status": "integrated",
        "user_id": user_id,
        "branches": {
            "regex": regex_res,
            "codex": codex_res,
            "system": system_res,
            "language": language_res,
        },
    }