"""
renderer.py

Responsibility: Deterministically render the text files a screensaver bundle needs.

Rules:
- Templates ship inside the package (`saverkit/templates`) and are rendered with Jinja2.
- Every render is a pure function of the display name: same name, same bytes.
- Undefined template variables are an error, never an empty string.

This module intentionally does NOT touch the filesystem outside the package templates,
and does not know about compilers, workspaces, or CLI parsing.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from saverkit.errors import RenderError

BUNDLE_ID_PREFIX = "com.example."
EXECUTABLE_NAME = "VideoSaver"
PRINCIPAL_CLASS = "VideoSaverView"
RESOURCE_FILENAME = "payload.mp4"

# Fixed object ids of the Debug/Release XCBuildConfiguration entries in project.pbxproj.
_BUILD_CONFIGURATIONS = (
    ("000000000000000000000901", "Debug"),
    ("000000000000000000000902", "Release"),
)


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("saverkit", "templates"),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _render(template_name: str, context: dict[str, Any]) -> str:
    try:
        return _environment().get_template(template_name).render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed rendering template: {template_name}") from e


def bundle_identifier(name: str) -> str:
    """
    Derive the CFBundleIdentifier for a display name.

    Only spaces are removed and the result lower-cased; any other punctuation is
    passed through untouched.
    """
    return BUNDLE_ID_PREFIX + name.replace(" ", "").lower()


def render_info_plist(name: str) -> str:
    return _render(
        "Info.plist.j2",
        {
            "name": name,
            "bundle_id": bundle_identifier(name),
            "executable_name": EXECUTABLE_NAME,
            "principal_class": PRINCIPAL_CLASS,
        },
    )


def render_saver_source(name: str) -> str:
    """
    Render the Swift source of the screensaver view.

    `name` is part of the signature for symmetry with the other renderers, but the
    template never sees it: the compiled view looks identical for every bundle.
    """
    del name
    stem, _, ext = RESOURCE_FILENAME.rpartition(".")
    return _render("VideoSaver.swift.j2", {"resource_stem": stem, "resource_ext": ext})


def render_pbxproj(name: str) -> str:
    """
    Render a minimal Xcode project for a single screensaver bundle target.

    The object ids are fixed; only the product name varies per request.
    """
    return _render(
        "project.pbxproj.j2",
        {
            "name": name,
            "build_configurations": _BUILD_CONFIGURATIONS,
            "deployment_target": "11.0",
            "swift_version": "5.0",
        },
    )
