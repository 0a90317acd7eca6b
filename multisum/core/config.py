"""Run configuration with validation."""
from __future__ import annotations

import hashlib
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError


class PrintMode(str, Enum):
    """How manifest lines mark the path."""
    TEXT = "text"      # "<digest>  path"
    BINARY = "binary"  # "<digest> *path"

    @property
    def marker(self) -> str:
        return "*" if self is PrintMode.BINARY else " "


class DigestAlgorithm(str, Enum):
    """Supported digest algorithms, valued by their hashlib name."""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @property
    def manifest_name(self) -> str:
        """Manifest filename, e.g. ``SHA256SUMS``."""
        return f"{self.name}SUMS"

    def new(self) -> "hashlib._Hash":
        """Fresh digest accumulator."""
        return hashlib.new(self.value)


class ChecksumConfig(BaseModel):
    """Validated, immutable configuration for one run.

    Paths are expanded and resolved. Construction fails with a pydantic
    ``ValidationError``; use :func:`build_config` to get a ``ConfigError``.
    """
    model_config = ConfigDict(frozen=True)

    print_mode: PrintMode = Field(
        default=PrintMode.BINARY,
        description="Manifest line format: text or binary",
    )
    algorithms: tuple[DigestAlgorithm, ...] = Field(
        ...,
        description="Digests to compute, one manifest each, in this order",
    )
    source_dir: Path = Field(..., description="Directory of files to checksum")
    target_dir: Path = Field(..., description="Directory receiving the manifests")

    @field_validator("algorithms", mode="before")
    @classmethod
    def normalize_algorithms(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = (value,)
        if isinstance(value, (list, tuple)):
            return tuple(item.lower() if isinstance(item, str) else item for item in value)
        return value

    @field_validator("algorithms")
    @classmethod
    def check_algorithms(cls, value: tuple[DigestAlgorithm, ...]) -> tuple[DigestAlgorithm, ...]:
        if not value:
            raise ValueError("at least one digest algorithm is required")
        if len(set(value)) != len(value):
            raise ValueError("digest algorithms must not repeat")
        return value

    @field_validator("source_dir", "target_dir", mode="before")
    @classmethod
    def reject_empty(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            raise ValueError("empty path")
        return value

    @field_validator("source_dir", "target_dir")
    @classmethod
    def check_directory(cls, value: Path) -> Path:
        value = value.expanduser().resolve()
        if not value.exists():
            raise ValueError(f"invalid path or not accessible: {value}")
        if not value.is_dir():
            raise ValueError(f"not a directory: {value}")
        return value

    @model_validator(mode="after")
    def check_distinct(self) -> "ChecksumConfig":
        if self.source_dir == self.target_dir:
            raise ValueError("source and target directory must differ")
        if self.target_dir.is_relative_to(self.source_dir):
            raise ValueError("target directory must not be inside the source directory")
        if self.source_dir.is_relative_to(self.target_dir):
            raise ValueError("source directory must not be inside the target directory")
        return self

    def recognized_manifest_names(self) -> frozenset[str]:
        """Manifest filenames this configuration produces."""
        return frozenset(algorithm.manifest_name for algorithm in self.algorithms)

    def describe(self) -> str:
        hashes = ",".join(algorithm.name for algorithm in self.algorithms)
        return (
            f'creating checksum files ({hashes}) in {self.print_mode.value} mode '
            f'for directory "{self.source_dir}" writing to "{self.target_dir}"'
        )


def build_config(**values: Any) -> ChecksumConfig:
    """Build a :class:`ChecksumConfig`, reporting problems as ``ConfigError``."""
    try:
        return ChecksumConfig(**values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in error['loc']) or 'config'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(f"invalid configuration: {problems}") from exc
