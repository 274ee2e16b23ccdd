"""sfpackage.

Builds Salesforce deployment manifests (package.xml and
destructiveChanges.xml) from a git diff between two revisions.
"""

__version__ = "1.0.0"
__author__ = "sfpackage maintainers"

__all__ = ["__version__"]
