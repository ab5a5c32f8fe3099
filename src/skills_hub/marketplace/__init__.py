"""Remote skill repositories: bounded fetching, manifest validation and download."""

from skills_hub.marketplace.fetch import BoundedFetcher, FetchedResponse
from skills_hub.marketplace.github_client import GitHubSkillSource, SkillDownload
from skills_hub.marketplace.manifest import Manifest, ManifestEntry, validate_manifest

__all__ = [
    "BoundedFetcher",
    "FetchedResponse",
    "GitHubSkillSource",
    "Manifest",
    "ManifestEntry",
    "SkillDownload",
    "validate_manifest",
]
