from dupfinder.core.models import HashAlgorithmName, SortOrder

ALGORITHM_ALIASES = {
    "sha256": HashAlgorithmName.SHA256,
    "sha-256": HashAlgorithmName.SHA256,
    "xxh64": HashAlgorithmName.XXH64,
    "xxhash": HashAlgorithmName.XXH64,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Content hash algorithm:\n"
    "  sha256     : " + HashAlgorithmName.SHA256.description + "\n"
    "  xxh64      : " + HashAlgorithmName.XXH64.description + "\n"
    "Example    : %(prog)s -i ~/Downloads --algorithm xxh64\n"
)

SORT_ALIASES = {
    "shortest-path": SortOrder.SHORTEST_PATH,
    "shortest-filename": SortOrder.SHORTEST_FILENAME,
    "alphabetical": SortOrder.ALPHABETICAL,
}

SORT_CHOICES = list(SORT_ALIASES.keys())

SORT_HELP_TEXT = (
    "Ordering of paths inside each duplicate group:\n"
    "  shortest-path     : files closer to root first (default)\n"
    "  shortest-filename : shorter filenames first\n"
    "  alphabetical      : plain path order\n"
)

EPILOG_TEXT = """
Examples:
  Basic usage - find duplicates in Downloads folder
  %(prog)s -i ~/Downloads

  Use 8 workers and 64KB read chunks, show progress and statistics
  %(prog)s -i ~/Downloads -w 8 --chunk-size 64K -v

  Faster non-cryptographic hash, list files that could not be read
  %(prog)s -i ~/Downloads --algorithm xxh64 --show-skipped

  Press Ctrl+C during a scan to stop it and print the partial result.
"""
