"""Data models for container lifecycle hooks.

The hook and spec models mirror the ``hooks`` section of the OCI runtime
specification (``config.json``); keys the hook layer does not use are
ignored when parsing.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from container_hooks.core.errors import SpecLoadError


class HookPhase(str, Enum):
    """Lifecycle phase at which a hook list runs.

    The value is the label used in logs and traces.
    """

    PRESTART = "pre-start"
    POSTSTART = "post-start"
    POSTSTOP = "post-stop"

    @property
    def oci_key(self) -> str:
        """Key of this phase's hook list in an OCI ``hooks`` section."""
        return self.value.replace("-", "")


class HookSpec(BaseModel):
    """A single hook entry from an OCI ``hooks`` list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str = Field(..., min_length=1, description="Absolute path to the hook executable")
    args: list[str] = Field(
        default_factory=list,
        description="Full argv, including argv[0], as in the OCI runtime spec",
    )
    env: list[str] | None = Field(
        default=None,
        description="KEY=VALUE entries; None inherits the runtime environment",
    )
    timeout: int | None = Field(
        default=None,
        gt=0,
        description="Seconds before the hook is killed; None waits forever",
    )

    def argv(self) -> list[str]:
        """Argument vector passed to the process (falls back to ``[path]``)."""
        return list(self.args) if self.args else [self.path]

    def env_mapping(self) -> dict[str, str] | None:
        """Environment as a mapping for ``subprocess``, or None to inherit.

        Entries without ``=`` name no variable and are skipped.
        """
        if self.env is None:
            return None
        env: dict[str, str] = {}
        for entry in self.env:
            key, sep, value = entry.partition("=")
            if not sep:
                continue
            env[key] = value
        return env

    def joined_args(self) -> str:
        return " ".join(self.args)


class ContainerRuntimeState(BaseModel):
    """State document written to a hook's standard input.

    Serializes to exactly ``{"pid": ..., "bundlePath": ..., "id": ...}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pid: int
    bundle_path: str = Field(..., alias="bundlePath")
    id: str

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class Hooks(BaseModel):
    """The ``hooks`` section of an OCI container specification."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    prestart: list[HookSpec] = Field(default_factory=list)
    poststart: list[HookSpec] = Field(default_factory=list)
    poststop: list[HookSpec] = Field(default_factory=list)

    def for_phase(self, phase: HookPhase) -> list[HookSpec]:
        """Return the ordered hook list for a lifecycle phase."""
        hooks: list[HookSpec] = getattr(self, phase.oci_key)
        return hooks


class ContainerSpec(BaseModel):
    """Minimal OCI-compatible container specification.

    Only the ``hooks`` section is modelled; ``hooks`` is None when the
    specification has no hooks section at all.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    oci_version: str | None = Field(default=None, alias="ociVersion")
    hooks: Hooks | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContainerSpec:
        """Build a spec from a decoded ``config.json`` document.

        Raises:
            SpecLoadError: If the document is not a valid specification.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SpecLoadError(f"Invalid container specification: {e}") from e

    @classmethod
    def from_file(cls, path: str | Path) -> ContainerSpec:
        """Load a spec from an OCI ``config.json`` file.

        Raises:
            SpecLoadError: If the file cannot be read or parsed.
        """
        config_path = Path(path)
        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise SpecLoadError(f"Cannot read {config_path.name}: {e.strerror}") from e
        except json.JSONDecodeError as e:
            raise SpecLoadError(f"Malformed JSON in {config_path.name}: {e}") from e

        if not isinstance(data, dict):
            raise SpecLoadError(f"{config_path.name} must contain a JSON object")
        return cls.from_dict(data)

    @classmethod
    def from_bundle(cls, bundle_path: str | Path) -> ContainerSpec:
        """Load ``config.json`` from an OCI bundle directory."""
        return cls.from_file(Path(bundle_path) / "config.json")
