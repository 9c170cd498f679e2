import pytest

from stch_vehicular.infrastructure import di_container
from stch_vehicular.infrastructure.di_container import DIContainer, get_container, reset_container


class TestGlobalContainer:

    @pytest.fixture
    def global_container(self, settings, monkeypatch):
        container = DIContainer(settings)
        monkeypatch.setattr(di_container, "_container", container)
        return container

    def test_get_container_returns_the_same_instance(self, global_container):
        assert get_container() is global_container
        assert get_container() is get_container()

    def test_reset_container_drops_singletons(self, global_container):
        cache = global_container.get('status_cache')
        assert global_container.get('status_cache') is cache

        reset_container()

        assert get_container() is global_container
        assert global_container.get('status_cache') is not cache

    def test_reset_container_clears_registered_instances(self, global_container):
        replacement = object()
        global_container.register_instance('insurance_upserter', replacement)

        reset_container()

        assert global_container.get('insurance_upserter') is not replacement

    def test_reset_container_creates_missing_container(self, settings, monkeypatch):
        monkeypatch.setattr(di_container, "_container", None)
        monkeypatch.setattr(di_container, "get_settings", lambda: settings)

        reset_container()

        assert isinstance(get_container(), DIContainer)
        assert get_container().settings is settings

    def test_unknown_service_is_rejected(self, global_container):
        with pytest.raises(ValueError, match="not registered"):
            global_container.get('reporting_service')
