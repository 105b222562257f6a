"""
Services package.

Business logic over the repositories. Each public service operation is
one transaction: it commits on success and rolls back on any error.
"""
