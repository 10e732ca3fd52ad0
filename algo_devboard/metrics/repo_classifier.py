"""
algo_devboard/metrics/repo_classifier.py — Repository Classifier.

Maps an "owner/name" repository identifier to one ecosystem segment:

    foundation  — algorandfoundation/*, algorand-devrel/*
    core        — algorand/*
    ecosystem   — everything else

Prefixes are checked in that order, so no repository can land in two
segments. `all` is a pseudo-category meaning "no filtering" and is never the
result of classification.
"""

from enum import Enum

from algo_devboard.config import DEFAULT_CONFIG, DevboardConfig


class RepoCategory(str, Enum):
    ALL = "all"
    FOUNDATION = "foundation"
    CORE = "core"
    ECOSYSTEM = "ecosystem"


CATEGORY_LABELS = {
    RepoCategory.ALL: "All",
    RepoCategory.FOUNDATION: "Algorand Foundation",
    RepoCategory.CORE: "Algorand Core",
    RepoCategory.ECOSYSTEM: "Ecosystem",
}


def classify_repository(
    repository: str,
    config: DevboardConfig = DEFAULT_CONFIG,
) -> RepoCategory:
    """
    Classify a repository by owner prefix.

    Examples:
        >>> classify_repository("algorand/go-algorand")
        <RepoCategory.CORE: 'core'>
        >>> classify_repository("algorandfoundation/tools")
        <RepoCategory.FOUNDATION: 'foundation'>
        >>> classify_repository("someoneelse/wallet")
        <RepoCategory.ECOSYSTEM: 'ecosystem'>
    """
    if repository.startswith(tuple(config.foundation_prefixes)):
        return RepoCategory.FOUNDATION
    if repository.startswith(tuple(config.core_prefixes)):
        return RepoCategory.CORE
    return RepoCategory.ECOSYSTEM


def matches_category(
    repository: str,
    category: RepoCategory,
    config: DevboardConfig = DEFAULT_CONFIG,
) -> bool:
    """True if *repository* belongs to *category* (always True for `all`)."""
    category = RepoCategory(category)
    if category is RepoCategory.ALL:
        return True
    return classify_repository(repository, config) is category
