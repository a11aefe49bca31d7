"""Research Sources - cross-source genealogy lookups with a local match cache.

Fans a person query out to Chronicling America, WikiTree and Open Archives,
captures each source's outcome independently and caches every mention for
later correlation with a local person record.
"""

__version__ = "1.0.0"
