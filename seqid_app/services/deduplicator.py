from typing import AbstractSet, List, NamedTuple, Sequence


class Partition(NamedTuple):
    new: List[str]
    duplicate_count: int


def partition(candidates: Sequence[str], existing: AbstractSet[str]) -> Partition:
    """
    Split candidates into ones not yet in existing and a duplicate count.
    
    Candidate order is preserved in new. existing is not modified.
    """
    new = [candidate for candidate in candidates if candidate not in existing]
    return Partition(new=new, duplicate_count=len(candidates) - len(new))
