"""Test module for active_encoding package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import active_encoding

    # Assert
    assert active_encoding is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import active_encoding

    # Assert
    assert isinstance(active_encoding.__version__, str)
    assert active_encoding.__version__ == "0.1.0"


def test_package_exports() -> None:
    """Test that __all__ exposes the main entry points."""
    # Arrange & Act
    import active_encoding

    # Assert
    for name in ["ActiveDocumentAgent", "attach_document", "charsets_equal", "AgentConfig"]:
        assert name in active_encoding.__all__
        assert hasattr(active_encoding, name)
