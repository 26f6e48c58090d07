"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure sorting logic for duplicate groups — zero dependencies outside core.
"""
import os
from typing import List, Optional
from dupfinder.core.models import DuplicateGroup, SortOrder


class Sorter:
    """
    Sorts paths inside duplicate groups according to specified order.
    Modifies groups in-place.
    Sorting priority:
    1. Primary criterion depends on sort_order:
       - SHORTEST_PATH: fewer path separators first, then shorter path string
       - SHORTEST_FILENAME: shorter basename first
       - ALPHABETICAL: plain string order
    2. Full path string resolves remaining ties
    """

    @staticmethod
    def sort_paths_inside_groups(groups: List[DuplicateGroup], sort_order: Optional[SortOrder] = None) -> None:
        if not groups:
            return

        if sort_order is None:
            sort_order = SortOrder.SHORTEST_PATH

        if sort_order == SortOrder.SHORTEST_PATH:
            key_func = lambda p: (p.rstrip(os.sep).count(os.sep), len(p), p)
        elif sort_order == SortOrder.SHORTEST_FILENAME:
            key_func = lambda p: (len(os.path.basename(p)), p)
        else:
            key_func = lambda p: p

        for group in groups:
            group.paths.sort(key=key_func)
