import engine

def test_package_metadata():
    assert engine.__version__ == "0.1.0"
    assert not hasattr(engine, "__author__")

def test_public_exports():
    for name in engine.__all__:
        assert hasattr(engine, name)
