# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for CreatorGen documentation."""

import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).parents[2] / "src"))

project = "CreatorGen"
author = "CreatorGen Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_member_order = "bysource"

html_theme = "alabaster"
