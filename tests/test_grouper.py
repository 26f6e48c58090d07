"""
Unit tests for duplicate filtering and grouping.
"""
from dupfinder.core.grouper import filter_duplicates, to_duplicate_groups
from dupfinder.core.models import SortOrder


class TestFilterDuplicates:
    """Test reduction of a fingerprint index to groups of two or more."""

    def test_keeps_only_shared_fingerprints(self):
        index = {"h1": ["/a", "/b"], "h2": ["/c"], "h3": ["/d", "/e", "/f"]}

        assert filter_duplicates(index) == {"h1": ["/a", "/b"], "h3": ["/d", "/e", "/f"]}

    def test_empty_index(self):
        assert filter_duplicates({}) == {}

    def test_all_singletons(self):
        assert filter_duplicates({"h1": ["/a"], "h2": ["/b"]}) == {}

    def test_input_is_not_modified(self):
        index = {"h1": ["/a", "/b"], "h2": ["/c"]}

        result = filter_duplicates(index)
        result["h1"].append("/z")

        assert index == {"h1": ["/a", "/b"], "h2": ["/c"]}

    def test_preserves_path_order(self):
        index = {"h1": ["/z", "/a", "/m"]}

        assert filter_duplicates(index)["h1"] == ["/z", "/a", "/m"]


class TestToDuplicateGroups:
    """Test conversion to display groups."""

    def test_larger_groups_first_then_fingerprint(self):
        groups = {"bb": ["/1", "/2"], "aa": ["/3", "/4"], "cc": ["/5", "/6", "/7"]}

        result = to_duplicate_groups(groups)

        assert [g.fingerprint for g in result] == ["cc", "aa", "bb"]

    def test_singletons_dropped(self):
        result = to_duplicate_groups({"aa": ["/1"], "bb": ["/2", "/3"]})

        assert len(result) == 1
        assert result[0].fingerprint == "bb"

    def test_paths_sorted_by_order(self):
        groups = {"aa": ["/data/zz.txt", "/data/deep/a.txt"]}

        result = to_duplicate_groups(groups, SortOrder.ALPHABETICAL)

        assert result[0].paths == ["/data/deep/a.txt", "/data/zz.txt"]
