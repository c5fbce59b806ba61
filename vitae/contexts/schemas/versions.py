"""
Semantic version helpers: parsing, nearest-compatible search and constraint matching.

Versions are major.minor.patch triples. Parsing is lenient ("1", "1.2", "v1.2.3",
"1.2.3-beta.1" are all accepted) and never raises.

Constraint grammar (used by rule applies_to):
    >=1.0.0  <=1.2  >1  <2.0.0  =1.0.0  ==1.0.0   comparators
    ^1.2.0                                       same major (same minor below 1.0)
    ~1.2.0                                       same major and minor
    1.x  1.*  1.2.x  *                           wildcards (a bare "1.2" means 1.2.x)
    ">=1.0.0 <2.0.0" or ">=1.0.0, <2.0.0"        AND
    "^0.1.0 || ^1.0.0"                           OR
"""

import re
from typing import Iterable, List, Optional, Tuple

Version = Tuple[int, int, int]

VERSION_PATTERN = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:[-+].*)?$")
CLAUSE_PATTERN = re.compile(r"^(>=|<=|==|>|<|=|\^|~)?\s*(\S+)$")
WILDCARDS = ("x", "X", "*")


def parse_version(text: str) -> Optional[Version]:
    """
    Parse a version string to (major, minor, patch).

    Returns:
        Tuple of ints (missing components are 0), or None if not a version

    Examples:
        parse_version("1.2.3")        # (1, 2, 3)
        parse_version("v2")           # (2, 0, 0)
        parse_version("0.1.0-rc.1")   # (0, 1, 0)
        parse_version("latest")       # None
    """
    if not isinstance(text, str):
        return None
    match = VERSION_PATTERN.match(text.strip())
    if not match:
        return None
    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return (major, minor, patch)


def format_version(version: Version) -> str:
    return ".".join(str(part) for part in version)


def _distance_key(version: Version) -> int:
    return version[1] * 100 + version[2]


def find_compatible_version(requested: str, available: Iterable[str]) -> Optional[str]:
    """
    Find the nearest known version within the requested version's major line.

    Distance is |(minor*100 + patch) - (requested minor*100 + patch)|; ties go to
    the newer candidate. Versions in another major line are never returned.

    Args:
        requested: Version to match
        available: Known version strings

    Returns:
        The nearest available version string, or None
    """
    target = parse_version(requested)
    if target is None:
        return None

    best = None
    best_rank = None
    for candidate in available:
        parsed = parse_version(candidate)
        if parsed is None or parsed[0] != target[0]:
            continue
        distance = abs(_distance_key(parsed) - _distance_key(target))
        # Smaller distance wins; on equal distance the larger version wins
        rank = (distance, tuple(-part for part in parsed))
        if best_rank is None or rank < best_rank:
            best, best_rank = candidate, rank
    return best


def _partial_components(text: str) -> Optional[List[Optional[int]]]:
    """Split "1.2.x" into [1, 2, None]; None marks a wildcard or missing component."""
    text = text.strip()
    if text.startswith("v"):
        text = text[1:]
    text = re.split(r"[-+]", text, maxsplit=1)[0]
    if text in WILDCARDS or text == "":
        return [None, None, None]

    parts = text.split(".")
    if len(parts) > 3:
        return None
    components: List[Optional[int]] = []
    for part in parts:
        if part in WILDCARDS:
            components.append(None)
        elif part.isdigit():
            components.append(int(part))
        else:
            return None
    components += [None] * (3 - len(components))
    # Anything after a wildcard is a wildcard too
    if None in components:
        first = components.index(None)
        components = components[:first] + [None] * (3 - first)
    return components


def _fill(components: List[Optional[int]]) -> Version:
    return tuple(part if part is not None else 0 for part in components)


def _range_for(components: List[Optional[int]]) -> Tuple[Optional[Version], Optional[Version]]:
    """Half-open [low, high) range covered by a partial version."""
    if components[0] is None:
        return None, None
    if components[1] is None:
        return (components[0], 0, 0), (components[0] + 1, 0, 0)
    if components[2] is None:
        return (components[0], components[1], 0), (components[0], components[1] + 1, 0)
    exact = _fill(components)
    return exact, exact


def _clause_matches(version: Version, clause: str) -> bool:
    match = CLAUSE_PATTERN.match(clause)
    if not match:
        return False
    operator, target_text = match.groups()
    components = _partial_components(target_text)
    if components is None:
        return False
    target = _fill(components)

    if operator == "^":
        if target[0] > 0 or components[1] is None:
            upper = (target[0] + 1, 0, 0)
        elif target[1] > 0 or components[2] is None:
            upper = (0, target[1] + 1, 0)
        else:
            upper = (0, 0, target[2] + 1)
        return target <= version < upper
    if operator == "~":
        upper = (target[0] + 1, 0, 0) if components[1] is None else (target[0], target[1] + 1, 0)
        return target <= version < upper
    if operator in (">=", ">", "<=", "<"):
        return {
            ">=": version >= target,
            ">": version > target,
            "<=": version <= target,
            "<": version < target,
        }[operator]

    # "=", "==" or bare version: exact, or a range when partial
    low, high = _range_for(components)
    if low is None:
        return True
    if low == high:
        return version == low
    return low <= version < high


def satisfies(version: str, constraint: str) -> bool:
    """
    Check whether a version satisfies a constraint expression.

    Returns:
        True if any OR-group has all of its clauses satisfied; an empty
        constraint matches everything; an unparseable version matches nothing
    """
    if not constraint or not constraint.strip():
        return True
    parsed = parse_version(version)
    if parsed is None:
        return False

    for group in constraint.split("||"):
        # Allow ">= 1.0.0" by joining an operator to the following token
        group = re.sub(r"(>=|<=|==|>|<|=|\^|~)\s+", r"\1", group.replace(",", " "))
        clauses = group.split()
        if clauses and all(_clause_matches(parsed, clause) for clause in clauses):
            return True
    return False
