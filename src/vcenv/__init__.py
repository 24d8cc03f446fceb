# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

# version and commit will be injected by setuptools_scm
try:
    from . import _version

    __version__ = _version.version
    __commit__ = getattr(_version, "commit_id", None) or ""
except ImportError:
    from importlib.metadata import PackageNotFoundError, version

    try:
        __version__ = version("vcenv")
    except PackageNotFoundError:
        __version__ = "0.0.0"
    __commit__ = ""
