"""Regression tests for package structure and imports."""

import tablelink


def test_public_exports():
    """Verify the package exposes the schema API and error taxonomy."""
    for name in ("Table", "TableRegistry", "ColumnType", "ValidationError", "ReferenceTypeMismatch"):
        assert hasattr(tablelink, name)


def test_errors_share_a_base_class():
    """Every schema error can be caught through SchemaError."""
    for name in (
        "ValidationError",
        "InvalidReferenceFormat",
        "UnknownReferencedTable",
        "UnknownReferencedColumn",
        "ReferenceTypeMismatch",
        "UnsupportedColumnType",
        "DefaultTypeMismatch",
    ):
        assert issubclass(getattr(tablelink, name), tablelink.SchemaError)
    assert issubclass(tablelink.UnknownReferencedTable, tablelink.ReferenceResolutionError)
    assert not tablelink.SchemaError("x").is_retryable
