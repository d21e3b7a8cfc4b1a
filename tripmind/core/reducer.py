from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


def merge_warnings(existing: Optional[List[str]], new: Optional[List[str]]) -> List[str]:
    """Append new workflow warnings, skipping ones already recorded."""

    if not new:
        return list(existing or [])
    if not existing:
        return list(dict.fromkeys(new))

    merged = list(existing)
    seen = set(existing)
    for item in new:
        if item not in seen:
            merged.append(item)
            seen.add(item)

    logger.debug(f"Reducer: {len(merged) - len(existing)} new warnings, total: {len(merged)}")
    return merged
