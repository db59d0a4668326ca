"""Smoke test: verify the package is importable and versioned."""

from __future__ import annotations


def test_import_dockwire() -> None:
    import dockwire

    assert hasattr(dockwire, "__name__")


def test_version_attribute() -> None:
    import dockwire

    assert isinstance(dockwire.__version__, str)
    assert dockwire.__version__ == "0.1.0"


def test_get_version_function() -> None:
    from dockwire import get_version

    assert get_version() == "0.1.0"


def test_public_names() -> None:
    import dockwire

    for name in dockwire.__all__:
        assert hasattr(dockwire, name), name


def test_docker_client_has_every_resource() -> None:
    from dockwire import Containers, DockerClient, Version

    assert issubclass(DockerClient, Containers)
    assert issubclass(DockerClient, Version)


def test_version_submodule_does_not_shadow_version_string() -> None:
    import types

    import dockwire

    assert isinstance(dockwire.version, types.ModuleType)
    assert isinstance(dockwire.__version__, str)
    assert dockwire.Version is dockwire.version.Version
