"""CSS structure helpers: selector scanning and offset-preserving parsing."""

from stylesplit.css.selectors import (
    find_block_start,
    find_pseudo_classes,
    replace_pseudo_classes,
    scan,
    split_selector_list,
)
from stylesplit.css.sheet import Edit, ParsedSheet, apply_edits, map_offset

__all__ = [
    "scan",
    "split_selector_list",
    "find_block_start",
    "find_pseudo_classes",
    "replace_pseudo_classes",
    "Edit",
    "ParsedSheet",
    "apply_edits",
    "map_offset",
]
