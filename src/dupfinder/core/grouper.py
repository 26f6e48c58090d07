"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Reduces a fingerprint index to duplicate groups.
"""

from typing import List, Mapping, Optional, Sequence

from dupfinder.core.models import DuplicateGroup, DuplicateGroups, SortOrder
from dupfinder.core.sorter import Sorter


def filter_duplicates(index: Mapping[str, Sequence[str]]) -> DuplicateGroups:
    """
    Keep only fingerprints shared by two or more paths.
    Pure: the input is left untouched and every list in the result is a new copy.
    """
    return {fp: list(paths) for fp, paths in index.items() if len(paths) >= 2}


def to_duplicate_groups(
        groups: Mapping[str, Sequence[str]],
        sort_order: Optional[SortOrder] = None
) -> List[DuplicateGroup]:
    """
    Convert a DuplicateGroups mapping into DuplicateGroup objects for display.
    Larger groups come first, ties broken by fingerprint so output is stable.
    """
    result = [
        DuplicateGroup(fingerprint=fp, paths=list(paths))
        for fp, paths in filter_duplicates(groups).items()
    ]
    result.sort(key=lambda g: (-g.duplicate_count, g.fingerprint))
    Sorter.sort_paths_inside_groups(result, sort_order)
    return result
