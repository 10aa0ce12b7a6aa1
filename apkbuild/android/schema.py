"""Pydantic models for the shared Android build configuration.

These models describe the configuration the shared build logic applies to
a module: SDK levels, build types, lint and packaging options, native
builds, ABI splits, product flavors, signing, Play publishing, and task
wiring. They are rendered to YAML/JSON by apkbuild.android.io.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from apkbuild.types import ModuleKind, PlayTrack


class NativeBuildSchema(BaseModel):
    """External native build (ndk-build or CMake).

    Attributes:
        tool: Native build tool.
        path: Build script path relative to the module.
        abi_filters: ABIs to build.
        arguments: Extra arguments passed to the native build.
    """

    model_config = ConfigDict(extra="forbid")

    tool: Literal["ndk-build", "cmake"]
    path: str
    abi_filters: list[str] = Field(default_factory=list)
    arguments: list[str] = Field(default_factory=list)


class DefaultConfigSchema(BaseModel):
    """Default configuration shared by every variant."""

    model_config = ConfigDict(extra="forbid")

    application_id: str | None = None
    min_sdk: int | None = None
    target_sdk: int | None = None
    version_code: int | None = None
    version_name: str | None = None
    test_instrumentation_runner: str | None = None
    native_build: NativeBuildSchema | None = None


class BuildTypeSchema(BaseModel):
    """A build type (release, debug)."""

    model_config = ConfigDict(extra="forbid")

    name: str
    minify_enabled: bool = False
    shrink_resources: bool = False
    application_id_suffix: str | None = None
    debuggable: bool = False
    jni_debuggable: bool = False
    signing_config: str | None = Field(
        default=None, description="Name of the signing config used"
    )
    proguard_files: list[str] = Field(default_factory=list)


class CompileOptionsSchema(BaseModel):
    """Java source and target compatibility."""

    model_config = ConfigDict(extra="forbid")

    source_compatibility: str
    target_compatibility: str


class KotlinOptionsSchema(BaseModel):
    """Kotlin compiler options."""

    model_config = ConfigDict(extra="forbid")

    jvm_target: str


class LintOptionsSchema(BaseModel):
    """Lint behavior and report locations."""

    model_config = ConfigDict(extra="forbid")

    show_all: bool = False
    check_all_warnings: bool = False
    check_release_builds: bool = True
    warnings_as_errors: bool = False
    text_output: str | None = None
    html_output: str | None = None


class PackagingOptionsSchema(BaseModel):
    """Packaging excludes and JNI library packaging mode."""

    model_config = ConfigDict(extra="forbid")

    excludes: list[str] = Field(default_factory=list)
    jni_legacy_packaging: bool = False


class AbiSplitsSchema(BaseModel):
    """Per-ABI APK splits."""

    model_config = ConfigDict(extra="forbid")

    enable: bool = False
    universal_apk: bool = False
    include: list[str] = Field(
        default_factory=list,
        description="Restricted ABI list; empty means every default ABI",
    )


class ProductFlavorSchema(BaseModel):
    """A product flavor within a flavor dimension."""

    model_config = ConfigDict(extra="forbid")

    name: str
    dimension: str
    version_code: int | None = None


class SigningConfigSchema(BaseModel):
    """Release signing configuration. Passwords are masked on export."""

    model_config = ConfigDict(extra="forbid")

    name: str = "release"
    store_file: str
    store_password: SecretStr
    key_alias: str | None = None
    key_password: SecretStr | None = None


class PlayConfigSchema(BaseModel):
    """Play Store publishing configuration."""

    model_config = ConfigDict(extra="forbid")

    track: PlayTrack
    default_to_app_bundles: bool = True
    service_account_credentials: str | None = Field(
        default=None,
        description="Credentials file; None means credentials come from the environment",
    )


class TaskSchema(BaseModel):
    """A task registered or wired by the shared build logic.

    Attributes:
        name: Task name.
        depends_on: Tasks this task depends on.
        up_to_date: Whether the task is considered up to date for this run.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    depends_on: list[str] = Field(default_factory=list)
    up_to_date: bool | None = None


class DependencySchema(BaseModel):
    """A dependency added to a configuration."""

    model_config = ConfigDict(extra="forbid")

    configuration: str
    notation: str


class AndroidConfigSchema(BaseModel):
    """Complete shared build configuration for one module."""

    model_config = ConfigDict(extra="forbid")

    module: str
    kind: ModuleKind
    application: bool = Field(
        default=False, description="Whether the module is an application module"
    )
    build_tools_version: str | None = None
    compile_sdk: int | None = None
    ndk_version: str | None = None
    default_config: DefaultConfigSchema = Field(default_factory=DefaultConfigSchema)
    build_types: dict[str, BuildTypeSchema] = Field(
        default_factory=lambda: {
            "debug": BuildTypeSchema(name="debug"),
            "release": BuildTypeSchema(name="release"),
        }
    )
    compile_options: CompileOptionsSchema | None = None
    kotlin_options: KotlinOptionsSchema | None = None
    lint_options: LintOptionsSchema | None = None
    packaging_options: PackagingOptionsSchema | None = None
    splits: AbiSplitsSchema | None = None
    flavor_dimensions: list[str] = Field(default_factory=list)
    product_flavors: list[ProductFlavorSchema] = Field(default_factory=list)
    signing_configs: dict[str, SigningConfigSchema] = Field(default_factory=dict)
    play: PlayConfigSchema | None = None
    tasks: list[TaskSchema] = Field(default_factory=list)
    dependencies: list[DependencySchema] = Field(default_factory=list)

    def build_type(self, name: str) -> BuildTypeSchema:
        """Get a build type by name, creating it if missing."""
        if name not in self.build_types:
            self.build_types[name] = BuildTypeSchema(name=name)
        return self.build_types[name]

    def task(self, name: str) -> TaskSchema:
        """Get a task by name, registering it if missing."""
        for task in self.tasks:
            if task.name == name:
                return task
        task = TaskSchema(name=name)
        self.tasks.append(task)
        return task

    def add_dependency(self, configuration: str, notation: str) -> None:
        self.dependencies.append(
            DependencySchema(configuration=configuration, notation=notation)
        )


__all__ = [
    "AbiSplitsSchema",
    "AndroidConfigSchema",
    "BuildTypeSchema",
    "CompileOptionsSchema",
    "DefaultConfigSchema",
    "DependencySchema",
    "KotlinOptionsSchema",
    "LintOptionsSchema",
    "NativeBuildSchema",
    "PackagingOptionsSchema",
    "PlayConfigSchema",
    "ProductFlavorSchema",
    "SigningConfigSchema",
    "TaskSchema",
]
