"""
Directory listing and sorting.
"""
from .sorter import DirectoryListing, ListingEntry, SORT_SWITCHES, parse_sort_key, sort_switches

__all__ = [
    'DirectoryListing',
    'ListingEntry',
    'SORT_SWITCHES',
    'parse_sort_key',
    'sort_switches',
]
