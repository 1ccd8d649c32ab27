def test_imports():
    """
    @brief
    Verifies that all core rostercheck modules are importable.

    @details
    Ensures package structure integrity and confirms that the public entry
    points are re-exported from the top-level package.
    """
    import rostercheck
    import rostercheck.dataloader.table_loader
    import rostercheck.metrics.metrics
    import rostercheck.validator

    # --- Assert ---
    assert all([rostercheck.dataloader.table_loader, rostercheck.metrics.metrics])
    assert rostercheck.ingest_table is rostercheck.dataloader.table_loader.ingest_table
    assert rostercheck.validate_dataset is rostercheck.validator.validate_dataset
    assert rostercheck.__version__
