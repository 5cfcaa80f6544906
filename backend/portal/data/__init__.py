"""
Read-only query wrappers used by pages and API views.

Accessors return plain serialized data and go through the tag-versioned
cache, so CMS edits show up as soon as the matching tags are revalidated.
"""
