"""Field resolution over loosely-typed values documents.

Values documents come from YAML files that may be hand-edited, partially
migrated, or simply missing sections. Every read goes through resolve(),
which walks the nested mapping and degrades to a caller-supplied fallback
instead of raising.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Sequence[str]]


def split_path(path: PathLike) -> tuple[str, ...]:
    """Normalize a dotted path or key sequence into a tuple of keys.

    Examples:
        >>> split_path("deployment.saas.repository.branch")
        ('deployment', 'saas', 'repository', 'branch')
        >>> split_path(["registry", "ghcr"])
        ('registry', 'ghcr')
        >>> split_path("")
        ()
    """
    if isinstance(path, str):
        return tuple(key for key in path.split(".") if key)
    return tuple(path)


def resolve(document: Optional[Mapping[str, Any]], path: PathLike, fallback: Any = None) -> Any:
    """Return the value at path in document, or fallback.

    Walks one key at a time. Returns fallback when the document is None,
    an intermediate key is absent or not a mapping, the terminal key is
    absent or null, or the terminal value's type differs from the
    fallback's type (when a fallback is given). Never raises and never
    mutates the document.

    Args:
        document: Nested mapping (may be None)
        path: Dotted path ("a.b.c") or sequence of keys
        fallback: Value returned when the path cannot be resolved

    Returns:
        Resolved value or fallback

    Examples:
        >>> doc = {"deployment": {"saas": {"repository": {"branch": "dev"}}}}
        >>> resolve(doc, "deployment.saas.repository.branch", "main")
        'dev'
        >>> resolve(doc, "deployment.oss.repository.branch", "main")
        'main'
        >>> resolve({"deployment": "oss"}, "deployment.oss.enabled", False)
        False
        >>> resolve({"replicas": 3}, "replicas", "1")
        '1'
    """
    keys = split_path(path)
    current: Any = document
    for key in keys:
        if not isinstance(current, Mapping) or key not in current:
            logger.debug(f"Path {'.'.join(keys)} not found at '{key}', using fallback")
            return fallback
        current = current[key]

    if current is None:
        return fallback
    if fallback is not None and not _same_scalar_kind(current, fallback):
        logger.debug(f"Path {'.'.join(keys)} has {type(current).__name__}, expected {type(fallback).__name__}")
        return fallback
    return current


def _same_scalar_kind(value: Any, fallback: Any) -> bool:
    # bool is an int subclass; keep them apart so "enabled: 1" is not a flag
    if isinstance(fallback, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(fallback, bool)
    if isinstance(fallback, Mapping):
        return isinstance(value, Mapping)
    return isinstance(value, type(fallback))
