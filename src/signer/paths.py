"""
Derivation Paths - Grammar, rendering and display names.

A path string is one of three shapes:
- root: the empty string (the identity's seed itself)
- ethereum: a bare chain id with no slash, e.g. "1"
- substrate: a run of segments, "//name" (hard) or "/name" (soft)

Parsing is total: every string maps to one of the three shapes, and
render_path(parse_path(s)) == s for every string.
"""

from dataclasses import dataclass
from typing import Iterable, Union


HARD_PREFIX = "//"
SOFT_PREFIX = "/"

ROOT_PATH_NAME = "Identity root"
NO_NAME = "No name"


# ============================================
# Path AST
# ============================================

@dataclass(frozen=True)
class Segment:
    """A single derivation step."""
    hard: bool
    value: str
    # Leading text written without a slash, e.g. "abc" in "abc/def"
    bare: bool = False

    def render(self) -> str:
        if self.bare:
            return self.value
        return (HARD_PREFIX if self.hard else SOFT_PREFIX) + self.value


@dataclass(frozen=True)
class RootPath:
    """The identity root (empty path)."""
    segments: tuple = ()


@dataclass(frozen=True)
class EthereumPath:
    """An Ethereum account, addressed by chain id instead of a derivation path."""
    chain_id: str


@dataclass(frozen=True)
class SubstratePath:
    """One or more hard/soft derivation segments, in order."""
    segments: tuple[Segment, ...]


PathAST = Union[RootPath, EthereumPath, SubstratePath]


# ============================================
# Parsing & Rendering
# ============================================

def _tokenize(raw: str) -> list[Segment]:
    segments = []
    pos = 0
    length = len(raw)

    # Text before the first slash is kept as a bare soft segment
    if not raw.startswith(SOFT_PREFIX):
        pos = raw.find(SOFT_PREFIX)
        segments.append(Segment(hard=False, value=raw[:pos], bare=True))

    while pos < length:
        hard = raw.startswith(HARD_PREFIX, pos)
        pos += len(HARD_PREFIX) if hard else len(SOFT_PREFIX)
        end = raw.find(SOFT_PREFIX, pos)
        if end == -1:
            end = length
        segments.append(Segment(hard=hard, value=raw[pos:end]))
        pos = end

    return segments


def parse_path(raw: str) -> PathAST:
    """Parse a raw path string. Never raises."""
    if raw == "":
        return RootPath()
    if SOFT_PREFIX not in raw:
        return EthereumPath(chain_id=raw)
    return SubstratePath(segments=tuple(_tokenize(raw)))


def render_path(path: PathAST) -> str:
    """Render a parsed path back to its string form."""
    if isinstance(path, EthereumPath):
        return path.chain_id
    return render_segments(path.segments)


def render_segments(segments: Iterable[Segment]) -> str:
    return "".join(segment.render() for segment in segments)


# ============================================
# Predicates
# ============================================

def is_ethereum_path(path: str) -> bool:
    """True for bare chain ids such as "1"."""
    return isinstance(parse_path(path), EthereumPath)


def is_substrate_path(path: str) -> bool:
    """True for root and slash-separated derivation paths."""
    return not is_ethereum_path(path)


def is_hard_derived_path(path: str) -> bool:
    """
    Check whether a path is made of hard derivations only.

    Root and Ethereum paths are never hard derived; one soft segment
    anywhere makes the whole path soft.
    """
    parsed = parse_path(path)
    if not isinstance(parsed, SubstratePath):
        return False
    return all(segment.hard for segment in parsed.segments)


# ============================================
# Display Names
# ============================================

def remove_slash(text: str) -> str:
    """Drop every slash, e.g. "//funding/2" -> "funding2"."""
    return text.replace(SOFT_PREFIX, "")


def extract_sub_path_name(path: str) -> str:
    """
    Default account name derived from the path itself.

    A single segment names itself; otherwise everything after the first
    (network) segment is used: //kusama//funding/2 -> funding2.
    """
    parsed = parse_path(path)
    if not isinstance(parsed, SubstratePath):
        return ""
    segments = parsed.segments
    if len(segments) == 1:
        return segments[0].value
    return remove_slash(render_segments(segments[1:]))


def get_path_name(path: str, identity=None) -> str:
    """Name to display for an account path, preferring the stored name."""
    if identity is not None:
        meta = identity.meta.get(path)
        if meta is not None and meta.name != "":
            return meta.name
    if is_ethereum_path(path):
        return NO_NAME
    if path == "":
        return ROOT_PATH_NAME
    return extract_sub_path_name(path)


# ============================================
# Building Child Paths
# ============================================

def get_child_path(parent: str, index: int, hard: bool) -> str:
    """Append a numbered hard or soft segment to a parent path."""
    prefix = HARD_PREFIX if hard else SOFT_PREFIX
    return f"{parent}{prefix}{index}"


def next_child_path(parent: str, existing: Iterable[str], hard: bool,
                    start: int = 0) -> str:
    """First numbered child of ``parent`` not already in ``existing``."""
    taken = set(existing)
    index = start
    while get_child_path(parent, index, hard) in taken:
        index += 1
    return get_child_path(parent, index, hard)
