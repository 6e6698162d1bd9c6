"""Registry of ssh flag grammars, keyed by OpenSSH version."""

from __future__ import annotations

# Letters of ssh options that take a value, as listed by `ssh -h`
_REGISTRY: dict[str, frozenset[str]] = {}

DEFAULT_GRAMMAR = "8.2"


def register_flag_grammar(version: str, letters: str) -> frozenset[str]:
    """Register the value-taking flag letters of an ssh version.

    Usage:
        register_flag_grammar("9.2", "BDEFIJLOPQRSWbceilmopw")

    Args:
        version: OpenSSH version label (e.g. "8.2")
        letters: Every flag letter that consumes an argument

    Returns:
        The registered set of letters
    """
    grammar = frozenset(letters)
    _REGISTRY[version] = grammar
    return grammar


def get_flag_grammar(version: str) -> frozenset[str] | None:
    """Look up the flag grammar for a version.

    Args:
        version: The version label to look up

    Returns:
        The registered letters, or None if the version is unknown
    """
    return _REGISTRY.get(version)


def list_flag_grammars() -> list[str]:
    """List all registered version labels.

    Returns:
        Version labels in registration order
    """
    return list(_REGISTRY.keys())


def clear_registry() -> None:
    """Clear all registered grammars. Primarily for testing."""
    _REGISTRY.clear()


register_flag_grammar("7.3", "DEFIJLOQRSWbceilmopw")
register_flag_grammar("8.2", "DEFIJLOQRSWbceilmopw")
register_flag_grammar("8.9", "BDEFIJLOQRSWbceilmopw")  # -B bind_interface
register_flag_grammar("9.2", "BDEFIJLOPQRSWbceilmopw")  # -P tag
