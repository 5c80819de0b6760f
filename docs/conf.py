import os
import sys

sys.path.insert(0, os.path.abspath("../src"))

# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------

project = "pcp-engine"
release = "0.1.0"

# -- General configuration ---------------------------------------------------

suppress_warnings = ["autosectionlabel.*"]

extensions = [
    "sphinx.ext.napoleon",
    "sphinx.ext.autodoc",
    "sphinx.ext.autosectionlabel",
    "sphinx_prompt",
    "sphinx_sitemap",
    "sphinx_inline_tabs",
    "sphinx_togglebutton",
    # renders the `pcp` command group
    "sphinx_click",
]

autodoc_member_order = "bysource"
autodoc_typehints = "description"

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# -- Options for HTML output -------------------------------------------------

html_baseurl = "https://pcp-engine.readthedocs.io"
html_theme = "furo"
html_title = f"{project} documentation v{release}"
htmlhelp_basename = "pcp-engine-releasedoc"
