"""
Path Grouping - Cluster sibling account paths for display.

Paths under a network root (e.g. //kusama) are grouped by their first
segment below that root:

    //kusama                -> "Kusama root"
    //kusama//funding/1     -> "//funding"
    //kusama//funding/2     -> "//funding"

Paths outside any network root are grouped by their own first segment,
and the empty path is the "Identity root".
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping

from .networks import NETWORK_LIST, NetworkSpec
from .paths import ROOT_PATH_NAME, EthereumPath, RootPath, parse_path
from .resolver import get_paths_with_network_key

if TYPE_CHECKING:
    from .models.identity import Identity

logger = logging.getLogger(__name__)


@dataclass
class PathGroup:
    """A titled, sorted set of sibling paths."""
    title: str
    paths: list[str] = field(default_factory=list)


def _display_order(group: PathGroup) -> tuple[int, int]:
    # Single paths first, shortest first; larger groups after
    if len(group.paths) == 1:
        return 1, len(group.paths[0])
    return len(group.paths), 0


def group_paths(paths: list[str],
                networks: Mapping[str, NetworkSpec] = NETWORK_LIST) -> list[PathGroup]:
    """
    Partition paths into display groups.

    Groups are ordered single paths first (shortest path first), then
    multi-path groups by size; ties keep the order in which their first
    path appeared. Paths inside a group are sorted.
    """
    network_roots = {
        network.path_id: network for network in networks.values() if network.is_substrate
    }
    groups: list[PathGroup] = []
    by_title: dict[str, PathGroup] = {}

    for path in paths:
        parsed = parse_path(path)

        if isinstance(parsed, RootPath):
            groups.append(PathGroup(title=ROOT_PATH_NAME, paths=[path]))
            continue
        if isinstance(parsed, EthereumPath):
            groups.append(PathGroup(title=path, paths=[path]))
            continue

        first = parsed.segments[0]
        network = network_roots.get(first.value) if first.hard else None

        if network is None:
            title = first.render()
        elif len(parsed.segments) == 1:
            groups.append(PathGroup(title=f"{network.title} root", paths=[path]))
            continue
        else:
            title = parsed.segments[1].render()

        group = by_title.get(title)
        if group is None:
            group = PathGroup(title=title)
            by_title[title] = group
            groups.append(group)
        group.paths.append(path)

    for group in groups:
        group.paths.sort()
    groups.sort(key=_display_order)
    return groups


def group_network_paths(identity: "Identity", network_key: str,
                        networks: Mapping[str, NetworkSpec] = NETWORK_LIST) -> list[PathGroup]:
    """Groups for every account of an identity on one network."""
    paths = get_paths_with_network_key(identity, network_key, networks)
    groups = group_paths(paths, networks)
    logger.debug(f"{identity.name}: {len(paths)} paths in {len(groups)} groups on {network_key}")
    return groups
