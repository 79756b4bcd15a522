"""Users app package.

Holds the ``User`` model and the directory adapter through which the
booking core resolves users by id. User management itself is done
through the Django admin.
"""
