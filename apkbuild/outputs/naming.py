"""Output file renaming.

Build tools name outputs like "app-oss-arm64-v8a-release.apk". Shipped
artifacts are named like "Matsuri-0.4.5-arm64-v8a.apk" instead.
"""

# Name fragments dropped from shipped artifact names
DROPPED_FRAGMENTS = ("-release", "-oss")


def _drop_fragments(name: str) -> str:
    for fragment in DROPPED_FRAGMENTS:
        name = name.replace(fragment, "")
    return name


def rename_common(file_name: str, project_name: str, version_name: str) -> str:
    """Rename a module output using the module's own name.

    Every "app" occurrence becomes "<project>-<version>".

    Args:
        file_name: Original output file name.
        project_name: Module name.
        version_name: Variant version name.

    Returns:
        The renamed file name.
    """
    renamed = file_name.replace("app", f"{project_name}-{version_name}")
    return _drop_fragments(renamed)


def rename_app(
    file_name: str,
    project_name: str,
    display_name: str,
    version_name: str,
) -> str:
    """Rename an application output using the product display name.

    Args:
        file_name: Original output file name.
        project_name: Application module name.
        display_name: Product display name.
        version_name: Variant version name.

    Returns:
        The renamed file name.
    """
    renamed = file_name.replace(project_name, f"{display_name}-{version_name}")
    return _drop_fragments(renamed)


__all__ = ["rename_app", "rename_common"]
