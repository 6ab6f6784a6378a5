"""Tests for the ssebridge top-level package — public names load on demand."""

import importlib

import pytest

import ssebridge


class TestPublicAPI:
    @pytest.mark.parametrize(("name", "module_name"), sorted(ssebridge._LAZY_IMPORTS.items()))
    def test_name_is_the_defining_module_object(self, name: str, module_name: str) -> None:
        module = importlib.import_module(module_name)
        assert getattr(ssebridge, name) is getattr(module, name)

    def test_registry_matches_all(self) -> None:
        assert set(ssebridge.__all__) == set(ssebridge._LAZY_IMPORTS)
        assert len(ssebridge.__all__) == len(set(ssebridge.__all__))

    def test_client_entry_points_exposed(self) -> None:
        assert callable(ssebridge.SSEClient)
        assert ssebridge.ClientConfig().idle_timeout == 90.0

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError, match="'ssebridge' has no attribute 'Nope'"):
            ssebridge.__getattr__("Nope")

    def test_version(self) -> None:
        assert ssebridge.__version__ == "0.1.0"
