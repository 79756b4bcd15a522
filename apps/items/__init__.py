"""Items app package.

Shared items and the comments left on them. The item views are
enriched with the last and next booking for the owner, and comment
creation is gated on a completed, approved booking of the item.
"""
