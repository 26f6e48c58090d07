from .duplicate_groups_tree import DuplicateGroupsTree

__all__ = ["DuplicateGroupsTree"]
