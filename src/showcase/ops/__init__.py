"""Kind-specific operations layered on the generic reader and writer.

Every function takes the :class:`~showcase.core.access.ContentAccess` as its
first argument and raises :class:`~showcase.core.errors.ShowcaseError`
subclasses on failure, so the API and the CLI handle errors the same way.
"""
