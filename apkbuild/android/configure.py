"""Shared Android build configuration.

This module fills in an AndroidConfigSchema the way the shared build logic
configures each kind of module:
- common: SDK levels, build types, lint, packaging
- kotlin: common + Kotlin JVM target and stdlib
- ndk-library / cmake-library: common + NDK + native build
- app-common: kotlin + signing + checksum task wiring
- app: app-common + metadata, splits, flavors, assets task, Play publishing
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Literal

from apkbuild.android.play import setup_play
from apkbuild.android.schema import (
    AbiSplitsSchema,
    AndroidConfigSchema,
    CompileOptionsSchema,
    KotlinOptionsSchema,
    LintOptionsSchema,
    NativeBuildSchema,
    PackagingOptionsSchema,
    ProductFlavorSchema,
)
from apkbuild.android.signing import apply_signing, resolve_signing
from apkbuild.config import Settings
from apkbuild.context import BuildContext
from apkbuild.outputs.checksums import checksum_task_name
from apkbuild.properties import load_local_properties, load_metadata
from apkbuild.types import ALL_ABIS, ModuleKind, ReleaseMetadata

logger = logging.getLogger(__name__)

BUILD_TOOLS_VERSION = "30.0.3"
COMPILE_SDK = 31
MIN_SDK = 21
TARGET_SDK = 31
JAVA_VERSION = "1.8"
NDK_VERSION = "23.1.7779620"

# Application version codes leave room for per-flavor offsets
VERSION_CODE_MULTIPLIER = 5
PLAY_VERSION_CODE_OFFSET = 4

FLAVOR_DIMENSION = "vendor"

TEST_INSTRUMENTATION_RUNNER = "androidx.test.runner.AndroidJUnitRunner"

PACKAGING_EXCLUDES = [
    "**/*.kotlin_*",
    "/META-INF/*.version",
    "/META-INF/native/**",
    "/META-INF/native-image/**",
    "/META-INF/INDEX.LIST",
    "DebugProbesKt.bin",
    "com/**",
    "org/**",
    "**/*.java",
    "**/*.proto",
    "okhttp3/**",
]

NDK_BUILD_SCRIPT = "src/main/jni/Android.mk"
CMAKE_BUILD_SCRIPT = "src/main/cpp/CMakeLists.txt"

DEFAULT_PROGUARD_FILE = "proguard-android-optimize.txt"
MODULE_PROGUARD_FILE = "proguard-rules.pro"

APP_TEST_DEPENDENCIES = [
    ("testImplementation", "junit:junit:4.13.2"),
    ("androidTestImplementation", "androidx.test.ext:junit:1.1.3"),
    ("androidTestImplementation", "androidx.test:runner:1.4.0"),
    ("androidTestImplementation", "androidx.test.espresso:espresso-core:3.4.0"),
]

DOWNLOAD_ASSETS_TASK = "downloadAssets"


def setup_common(android: AndroidConfigSchema, settings: Settings) -> None:
    """Apply SDK levels, build types, lint and packaging options."""
    android.build_tools_version = BUILD_TOOLS_VERSION
    android.compile_sdk = COMPILE_SDK
    android.default_config.min_sdk = MIN_SDK
    android.default_config.target_sdk = TARGET_SDK

    android.build_type("release").minify_enabled = True

    android.compile_options = CompileOptionsSchema(
        source_compatibility=JAVA_VERSION,
        target_compatibility=JAVA_VERSION,
    )
    android.lint_options = LintOptionsSchema(
        show_all=True,
        check_all_warnings=True,
        check_release_builds=False,
        warnings_as_errors=True,
        text_output="build/lint.txt",
        html_output="build/lint.html",
    )
    android.packaging_options = PackagingOptionsSchema(
        excludes=list(PACKAGING_EXCLUDES),
        jni_legacy_packaging=True,
    )

    if not android.application:
        return

    release = android.build_type("release")
    release.shrink_resources = True
    if settings.minify_disabled:
        logger.info("Minification disabled from the environment")
        release.shrink_resources = False
        release.minify_enabled = False

    debug = android.build_type("debug")
    debug.application_id_suffix = "debug"
    debug.debuggable = True
    debug.jni_debuggable = True


def setup_kotlin_common(android: AndroidConfigSchema, settings: Settings) -> None:
    setup_common(android, settings)
    android.kotlin_options = KotlinOptionsSchema(jvm_target=JAVA_VERSION)
    android.add_dependency("implementation", "org.jetbrains.kotlin:kotlin-stdlib-jdk8")


def setup_ndk(android: AndroidConfigSchema) -> None:
    android.ndk_version = NDK_VERSION


def _native_build(
    ctx: BuildContext,
    settings: Settings,
    tool: Literal["ndk-build", "cmake"],
    path: str,
) -> NativeBuildSchema:
    if ctx.target_abi.is_set:
        abi_filters = [ctx.target_abi.value]
    else:
        abi_filters = [abi.value for abi in ALL_ABIS]
    return NativeBuildSchema(
        tool=tool,
        path=path,
        abi_filters=abi_filters,
        arguments=[f"-j{settings.effective_native_jobs}"],
    )


def setup_ndk_library(
    android: AndroidConfigSchema,
    ctx: BuildContext,
    settings: Settings,
) -> None:
    """Configure a library built with ndk-build."""
    setup_common(android, settings)
    setup_ndk(android)
    android.default_config.native_build = _native_build(
        ctx, settings, "ndk-build", NDK_BUILD_SCRIPT
    )


def setup_cmake_library(
    android: AndroidConfigSchema,
    ctx: BuildContext,
    settings: Settings,
) -> None:
    """Configure a library built with CMake."""
    setup_common(android, settings)
    setup_ndk(android)
    android.default_config.native_build = _native_build(
        ctx, settings, "cmake", CMAKE_BUILD_SCRIPT
    )


def setup_app_common(
    android: AndroidConfigSchema,
    ctx: BuildContext,
    settings: Settings,
    local_props: Mapping[str, str],
) -> None:
    """Configure signing and checksum tasks for an application module.

    Raises:
        MissingSigningError: If a release flavor is requested without a key.
    """
    setup_kotlin_common(android, settings)

    signing = resolve_signing(local_props, settings, settings.project_root)
    apply_signing(android, ctx, signing)

    if not android.application:
        return

    calculate = checksum_task_name(ctx)
    android.task(calculate).depends_on.append(f"package{ctx.flavor}")
    android.task(f"assemble{ctx.flavor}").depends_on.append(calculate)


def setup_app(
    android: AndroidConfigSchema,
    ctx: BuildContext,
    settings: Settings,
    metadata: ReleaseMetadata,
    local_props: Mapping[str, str],
) -> None:
    """Configure the application module.

    Raises:
        MissingSigningError: If a release flavor is requested without a key.
    """
    version_code = metadata.version_code * VERSION_CODE_MULTIPLIER

    defaults = android.default_config
    defaults.application_id = metadata.package_name
    defaults.version_code = version_code
    defaults.version_name = metadata.version_name
    defaults.test_instrumentation_runner = TEST_INSTRUMENTATION_RUNNER

    setup_app_common(android, ctx, settings, local_props)

    android.build_type("release").proguard_files = [
        DEFAULT_PROGUARD_FILE,
        MODULE_PROGUARD_FILE,
    ]

    android.splits = AbiSplitsSchema(
        enable=True,
        universal_apk=False,
        include=[ctx.target_abi.value] if ctx.target_abi.is_set else [],
    )

    android.flavor_dimensions = [FLAVOR_DIMENSION]
    android.product_flavors = [
        ProductFlavorSchema(name="oss", dimension=FLAVOR_DIMENSION),
        ProductFlavorSchema(
            name="play",
            dimension=FLAVOR_DIMENSION,
            version_code=version_code - PLAY_VERSION_CODE_OFFSET,
        ),
    ]

    android.task(DOWNLOAD_ASSETS_TASK).up_to_date = ctx.flavor.endswith("Debug")
    android.task(f"pre{ctx.flavor}Build").depends_on.append(DOWNLOAD_ASSETS_TASK)

    stdlib = "org.jetbrains.kotlin:kotlin-stdlib"
    if settings.kotlin_version:
        stdlib = f"{stdlib}:{settings.kotlin_version}"
    android.add_dependency("implementation", stdlib)
    android.add_dependency("implementation", "project(:plugin:api)")
    for configuration, notation in APP_TEST_DEPENDENCIES:
        android.add_dependency(configuration, notation)

    setup_play(android, settings.project_root, settings)


def configure_module(
    kind: ModuleKind,
    ctx: BuildContext,
    settings: Settings,
    module: str | None = None,
) -> AndroidConfigSchema:
    """Produce the shared configuration for a module of the given kind.

    Metadata and local properties are read only for the kinds that need
    them; read failures propagate.

    Args:
        kind: Kind of module.
        ctx: Invocation context.
        settings: Effective settings.
        module: Module name; defaults to the configured project name.

    Returns:
        The filled-in AndroidConfigSchema.

    Raises:
        FileNotFoundError: If the metadata file is missing for an app module.
        MetadataError: If metadata is incomplete.
        MissingSigningError: If a release flavor is requested without a key.
    """
    android = AndroidConfigSchema(
        module=module or settings.project_name,
        kind=kind,
        application=kind in (ModuleKind.APP, ModuleKind.APP_COMMON),
    )
    logger.debug("Configuring %s module %s", kind.value, android.module)

    if kind is ModuleKind.COMMON:
        setup_common(android, settings)
    elif kind is ModuleKind.KOTLIN:
        setup_kotlin_common(android, settings)
    elif kind is ModuleKind.NDK_LIBRARY:
        setup_ndk_library(android, ctx, settings)
    elif kind is ModuleKind.CMAKE_LIBRARY:
        setup_cmake_library(android, ctx, settings)
    else:
        local_props = load_local_properties(
            settings.project_root, settings.local_properties_b64
        )
        if kind is ModuleKind.APP:
            metadata = load_metadata(settings.project_root)
            setup_app(android, ctx, settings, metadata, local_props)
        else:
            setup_app_common(android, ctx, settings, local_props)

    return android


__all__ = [
    "BUILD_TOOLS_VERSION",
    "COMPILE_SDK",
    "NDK_VERSION",
    "configure_module",
    "setup_app",
    "setup_app_common",
    "setup_cmake_library",
    "setup_common",
    "setup_kotlin_common",
    "setup_ndk",
    "setup_ndk_library",
]
