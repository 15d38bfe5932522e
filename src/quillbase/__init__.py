"""QuillBase - collection schema builder for a headless CMS.

Naming rules, a field type catalog, a draft workflow for building
collections, and a REST store to persist them.
"""

__version__ = "0.1.0"

from quillbase.infrastructure.api.app import app

__all__ = ["app", "__version__"]
