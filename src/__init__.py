"""
Pivot API

Backend for the Pivot browser extension: finds news coverage presenting an
opposing viewpoint to the article being read, and produces summaries and
critical insights through a text-generation provider.
"""

__version__ = "1.0.0"
__author__ = "Pivot Team"
