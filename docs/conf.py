import os
import sys

sys.path.insert(0, os.path.abspath("../python"))

project = "sparselu"
extensions = [
    "myst_parser",
    "sphinx.ext.napoleon",
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
]
autosummary_generate = True
autodoc_default_options = {
    "members": True,
    "undoc-members": True,
    "show-inheritance": True,
}
html_theme = "pydata_sphinx_theme"
napoleon_numpy_docstring = True
napoleon_include_init_with_doc = True
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
}
source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}
