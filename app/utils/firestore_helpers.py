"""
Firestore query helpers.
"""

from google.cloud.firestore_v1.base_query import FieldFilter


def where_filter(query, field_path: str, op_string: str, value):
    """
    Apply a where clause using the keyword filter API, which avoids the
    positional-argument deprecation warning of newer google-cloud-firestore.

    Usage:
        query = where_filter(collection, "status", "==", "pending")
        query = where_filter(query, "severity", "==", "high")
    """
    return query.where(filter=FieldFilter(field_path, op_string, value))
