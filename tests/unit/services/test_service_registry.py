"""
Tests for the lazily instantiating service registry
"""

import pytest
from unittest.mock import Mock

from services.registry import ServiceRegistry


class TestServiceRegistry:
    """Test suite for service registry"""

    @pytest.fixture
    def registry(self):
        """Create a fresh registry instance"""
        return ServiceRegistry()

    def test_init(self, registry):
        assert registry.list_services() == []

    def test_register_factory(self, registry):
        """Factory is only called on first get, then cached"""
        factory = Mock(return_value="service_instance")
        registry.register_factory('lazy_service', factory)

        factory.assert_not_called()

        assert registry.get('lazy_service') == "service_instance"
        assert registry.get('lazy_service') == "service_instance"
        factory.assert_called_once()

    def test_get_unknown_service_raises(self, registry):
        with pytest.raises(ValueError, match="Service 'missing' is not registered"):
            registry.get('missing')

    def test_list_services_is_sorted(self, registry):
        registry.register_factory('cost_estimation', Mock())
        registry.register_factory('business_case', Mock())
        registry.get('business_case')

        assert registry.list_services() == ['business_case', 'cost_estimation']
