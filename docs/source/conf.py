import os
import sys
sys.path.insert(0, os.path.abspath('../..'))


project = 'Contacts API'
copyright = '2025, Contacts Manager developers'
author = 'Contacts Manager developers'

extensions = ['sphinx.ext.autodoc', 'sphinx.ext.napoleon']

templates_path = ['_templates']
exclude_patterns = []


html_theme = 'alabaster'
html_static_path = []
