# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the rtshape API documentation."""

import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[2] / "src"))

project = "rtshape"
author = "rtshape Contributors"
release = "0.1.0"

# Docstrings use the Google style (Args/Returns/Raises sections).
extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_member_order = "bysource"

html_theme = "alabaster"
