"""Data models for flutter-cache-cleaner."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def format_size(size_bytes: int) -> str:
    """Format bytes to a human-readable string (binary units)."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024**2:
        return f"{size_bytes / 1024:.2f} KB"
    elif size_bytes < 1024**3:
        return f"{size_bytes / 1024**2:.2f} MB"
    else:
        return f"{size_bytes / 1024**3:.2f} GB"


class TargetKind(str, Enum):
    """Known cache target kinds."""

    # Per-project
    BUILD = "build"
    DART_TOOL = "dart_tool"
    FLUTTER_PLUGINS = "flutter_plugins"
    FLUTTER_PLUGINS_DEPENDENCIES = "flutter_plugins_dependencies"
    IDEA = "idea"
    GRADLE = "gradle"
    PODS = "pods"
    SYMLINKS = "symlinks"

    # Global
    PUB_CACHE = "pub_cache"
    GRADLE_CACHE = "gradle_cache"
    XCODE_DERIVED_DATA = "xcode_derived_data"
    COCOAPODS_CACHE = "cocoapods_cache"

    @property
    def is_global(self) -> bool:
        """Whether this kind lives outside any project."""
        return self in GLOBAL_KINDS


GLOBAL_KINDS = frozenset(
    {
        TargetKind.PUB_CACHE,
        TargetKind.GRADLE_CACHE,
        TargetKind.XCODE_DERIVED_DATA,
        TargetKind.COCOAPODS_CACHE,
    }
)


class TargetState(str, Enum):
    """Lifecycle of a single target during a clean."""

    PENDING = "pending"
    VALIDATED = "validated"
    DELETED = "deleted"
    VALIDATION_REJECTED = "validation_rejected"
    DELETION_FAILED = "deletion_failed"


class CacheTarget(BaseModel):
    """A cache location that can be cleaned."""

    model_config = ConfigDict(frozen=True)

    # Any string; unknown kinds are rejected at validation
    kind: str = Field(..., description="Target kind (see TargetKind)")
    path: str = Field(..., description="Canonical absolute path")
    size_bytes: int = Field(0, ge=0, description="Size in bytes")
    is_global: bool = Field(False, description="Global cache rather than per-project")
    exists: bool = Field(True, description="Whether the path was found")

    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_size(self.size_bytes)

    def with_size(self, size_bytes: int) -> "CacheTarget":
        """Return a copy carrying a recomputed size."""
        return self.model_copy(update={"size_bytes": size_bytes})


class ProjectInfo(BaseModel):
    """A detected Flutter project and its cache targets."""

    path: str = Field(..., description="Canonical project root")
    targets: list[CacheTarget] = Field(default_factory=list)
    is_priority: bool = Field(False, description="Found under a priority root")

    @property
    def total_size(self) -> int:
        """Total reclaimable bytes."""
        return sum(t.size_bytes for t in self.targets)

    @property
    def size_human(self) -> str:
        return format_size(self.total_size)


class ScanResult(BaseModel):
    """Aggregated result of one scan."""

    priority_projects: list[ProjectInfo] = Field(default_factory=list)
    default_projects: list[ProjectInfo] = Field(default_factory=list)
    global_targets: list[CacheTarget] = Field(default_factory=list)

    @property
    def all_projects(self) -> list[ProjectInfo]:
        """Priority and default projects combined."""
        return [*self.priority_projects, *self.default_projects]

    @property
    def project_count(self) -> int:
        return len(self.priority_projects) + len(self.default_projects)

    @property
    def all_targets(self) -> list[CacheTarget]:
        """Every target in the result, project targets first."""
        targets = [t for p in self.all_projects for t in p.targets]
        targets.extend(self.global_targets)
        return targets

    @property
    def total_size(self) -> int:
        """Total reclaimable bytes across projects and global caches."""
        project_size = sum(p.total_size for p in self.all_projects)
        global_size = sum(t.size_bytes for t in self.global_targets)
        return project_size + global_size

    @property
    def size_human(self) -> str:
        return format_size(self.total_size)


class CleanOutcome(BaseModel):
    """Result of a cleaning operation."""

    deleted_paths: set[str] = Field(default_factory=set)
    failed_paths: dict[str, str] = Field(
        default_factory=dict, description="Path to failure reason"
    )
    reclaimed_bytes: int = Field(0, ge=0, description="Bytes reclaimed")

    @property
    def success(self) -> bool:
        """True when nothing failed."""
        return not self.failed_paths

    @property
    def deleted_count(self) -> int:
        return len(self.deleted_paths)

    @property
    def failed_count(self) -> int:
        return len(self.failed_paths)

    @property
    def size_human(self) -> str:
        return format_size(self.reclaimed_bytes)

    def record_deleted(self, path: str, size_bytes: int) -> None:
        self.deleted_paths.add(path)
        self.reclaimed_bytes += size_bytes

    def record_failed(self, path: str, reason: str) -> None:
        self.failed_paths[path] = reason

    def merge(self, other: "CleanOutcome") -> "CleanOutcome":
        """Fold another outcome into this one and return self."""
        self.deleted_paths |= other.deleted_paths
        self.failed_paths.update(other.failed_paths)
        self.reclaimed_bytes += other.reclaimed_bytes
        return self
